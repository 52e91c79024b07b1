from unittest import TestCase

from k6_client_codegen.analyzer.name_resolver import NameResolver
from k6_client_codegen.analyzer.operations import OperationPostProcessor, to_template_path
from k6_client_codegen.config import CodeGeneratorConfig
from k6_client_codegen.model.nodes import MediaType, Operation, OperationImport, OperationsBundle


def process(*operations, imports=None, class_name="PetApi", **options) -> OperationsBundle:
    processor = OperationPostProcessor(NameResolver(CodeGeneratorConfig(**options)))
    bundle = OperationsBundle(class_name=class_name, operations=list(operations), imports=imports or [])
    return processor.process(bundle)


class TestPathTemplates(TestCase):
    def test_placeholders_become_interpolations(self):
        self.assertEqual(to_template_path("/pets/{petId}/photos/{photoId}"), "/pets/${petId}/photos/${photoId}")

    def test_path_without_placeholders_is_unchanged(self):
        self.assertEqual(to_template_path("/pets"), "/pets")

    def test_already_templated_path_is_unchanged(self):
        self.assertEqual(to_template_path("/pets/${petId}"), "/pets/${petId}")

    def test_operation_path_is_rewritten(self):
        bundle = process(Operation(name="getPet", path="/pets/{petId}"))
        self.assertEqual(bundle.operations[0].path, "/pets/${petId}")


class TestConsumesInference(TestCase):
    def test_body_param_infers_json(self):
        bundle = process(Operation(name="addPet", path="/pets", has_body_param=True))
        op = bundle.operations[0]
        self.assertEqual(op.consumes, [MediaType(media_type="application/json", is_json=True)])
        self.assertTrue(op.has_consumes)

    def test_form_params_infer_url_encoded(self):
        bundle = process(Operation(name="upload", path="/pets", has_form_params=True))
        op = bundle.operations[0]
        self.assertEqual(op.consumes, [MediaType(media_type="application/x-www-form-urlencoded", is_json=False)])
        self.assertTrue(op.has_consumes)

    def test_body_and_form_params_are_not_json(self):
        bundle = process(Operation(name="upload", path="/pets", has_body_param=True, has_form_params=True))
        self.assertFalse(bundle.operations[0].consumes[0].is_json)

    def test_empty_consumes_list_is_filled(self):
        bundle = process(Operation(name="addPet", path="/pets", has_body_param=True, consumes=[]))
        self.assertEqual(len(bundle.operations[0].consumes), 1)

    def test_explicit_consumes_are_kept(self):
        xml = MediaType(media_type="application/xml", is_json=False)
        bundle = process(Operation(name="addPet", path="/pets", has_body_param=True, consumes=[xml], has_consumes=True))
        self.assertEqual(bundle.operations[0].consumes, [xml])

    def test_operation_without_body_gets_no_consumes(self):
        bundle = process(Operation(name="getPet", path="/pets/{petId}"))
        self.assertIsNone(bundle.operations[0].consumes)
        self.assertFalse(bundle.operations[0].has_consumes)


class TestOperationImports(TestCase):
    def test_filename_mirrors_resolved_import(self):
        bundle = process(imports=[OperationImport(classname="Pet", import_path="../model/pet")])
        im = bundle.imports[0]
        self.assertEqual(im.filename, "../model/pet")
        self.assertEqual(im.classname, "Pet")

    def test_missing_import_path_is_resolved(self):
        bundle = process(imports=[OperationImport(classname="PetCategory")], file_naming="kebab-case")
        self.assertEqual(bundle.imports[0].import_path, "../model/pet-category")
        self.assertEqual(bundle.imports[0].filename, "../model/pet-category")

    def test_api_filename(self):
        self.assertEqual(process().api_filename, "petApi")
        self.assertEqual(process(class_name="").api_filename, "default")

    def test_process_returns_same_bundle(self):
        processor = OperationPostProcessor(NameResolver(CodeGeneratorConfig()))
        bundle = OperationsBundle(class_name="PetApi")
        self.assertIs(processor.process(bundle), bundle)
