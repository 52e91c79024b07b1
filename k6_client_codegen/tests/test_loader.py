import json
from pathlib import Path
from unittest import TestCase

from k6_client_codegen.config import CodeGeneratorConfig
from k6_client_codegen.errors import GraphLoadError
from k6_client_codegen.loader import GraphLoader, dump_document
from k6_client_codegen.model.nodes import ParameterLocation, TypeKind
from k6_client_codegen.pipeline import PostProcessor

TEST_DATA = Path(__file__).parent / "test_data"


class TestParseType(TestCase):
    def setUp(self):
        self.loader = GraphLoader()

    def test_primitives(self):
        for name in ("string", "number", "boolean", "Date", "any"):
            self.assertEqual(self.loader.parse_type(name).kind, TypeKind.PRIMITIVE)

    def test_mapped_types(self):
        self.assertEqual(self.loader.parse_type("file").name, "Blob")
        self.assertEqual(self.loader.parse_type("integer").name, "number")

    def test_model(self):
        type_ref = self.loader.parse_type("Pet")
        self.assertEqual(type_ref.kind, TypeKind.MODEL)
        self.assertEqual(type_ref.referenced_models(), ["Pet"])

    def test_arrays(self):
        for expression in ("Array<Pet>", "Pet[]"):
            type_ref = self.loader.parse_type(expression)
            self.assertEqual(type_ref.kind, TypeKind.ARRAY)
            self.assertEqual(type_ref.referenced_models(), ["Pet"])
            self.assertEqual(type_ref.to_type_string(), "Array<Pet>")

    def test_map(self):
        type_ref = self.loader.parse_type("{ [key: string]: Pet; }")
        self.assertEqual(type_ref.kind, TypeKind.MAP)
        self.assertEqual(type_ref.referenced_models(), ["Pet"])

    def test_union(self):
        type_ref = self.loader.parse_type("Cat | Dog | string")
        self.assertEqual(type_ref.kind, TypeKind.UNION)
        self.assertEqual(type_ref.referenced_models(), ["Cat", "Dog"])
        self.assertEqual(type_ref.to_type_string(), "Cat | Dog | string")

    def test_union_inside_array_is_not_split_at_top_level(self):
        type_ref = self.loader.parse_type("Array<Cat | Dog>")
        self.assertEqual(type_ref.kind, TypeKind.ARRAY)
        self.assertEqual(type_ref.type_args[0].kind, TypeKind.UNION)
        self.assertEqual(type_ref.referenced_models(), ["Cat", "Dog"])


class TestGraphLoader(TestCase):
    def setUp(self):
        with open(TEST_DATA / "petstore_graph.json") as f:
            self.graph, self.bundles = GraphLoader().load(json.load(f))

    def test_entities_in_document_order(self):
        self.assertEqual(self.graph.names(), ["Pet", "Cat", "Dog", "Lizard", "Owner"])

    def test_children_are_linked(self):
        pet = self.graph.get("Pet")
        self.assertEqual([c.name for c in pet.children], ["Cat", "Dog", "Lizard"])
        self.assertIs(pet.children[1], self.graph.get("Dog"))

    def test_discriminator(self):
        discriminator = self.graph.get("Pet").discriminator
        self.assertEqual(discriminator.property_name, "petType")
        self.assertEqual(discriminator.lookup("Dog"), "dog")
        self.assertIsNone(discriminator.lookup("Lizard"))

    def test_discriminator_value_extension_becomes_override(self):
        lizard = self.graph.get("Lizard")
        self.assertEqual(lizard.discriminator_value_override, "reptile")
        self.assertEqual(lizard.vendor_extensions, {"x-internal": True})

    def test_operation_flags(self):
        operations = {op.name: op for op in self.bundles[0].operations}
        self.assertTrue(operations["addPet"].has_body_param)
        self.assertTrue(operations["uploadPetPhoto"].has_form_params)
        self.assertEqual(operations["uploadPetPhoto"].parameters[2].location, ParameterLocation.FORM)
        self.assertEqual(operations["getPetById"].http_method, "GET")
        self.assertIsNone(operations["getPetById"].consumes)

    def test_unknown_child_is_rejected(self):
        with self.assertRaises(GraphLoadError) as cm:
            GraphLoader().load({"models": {"Pet": {"children": ["Cat"]}}})
        self.assertIn("#/models/Pet/children", str(cm.exception))

    def test_unknown_parameter_location_is_rejected(self):
        document = {"apis": [{"className": "PetApi", "operations": [{"parameters": [{"name": "x", "in": "matrix"}]}]}]}
        with self.assertRaises(GraphLoadError):
            GraphLoader().load(document)

    def test_consumes_without_media_type_is_rejected(self):
        document = {"apis": [{"className": "PetApi", "operations": [{"consumes": [{"isJson": True}]}]}]}
        with self.assertRaises(GraphLoadError) as cm:
            GraphLoader().load(document)
        self.assertIn("#/apis/0/operations/0/consumes/0", str(cm.exception))

    def test_property_without_name_is_rejected(self):
        with self.assertRaises(GraphLoadError):
            GraphLoader().load({"models": {"Pet": {"properties": [{"type": "string"}]}}})


class TestDumpDocument(TestCase):
    def test_renderer_document(self):
        with open(TEST_DATA / "petstore_graph.json") as f:
            graph, bundles = GraphLoader().load(json.load(f))
        config = CodeGeneratorConfig(tagged_unions=True)
        models, bundles = PostProcessor(config).run(graph, bundles)

        document = dump_document(models, bundles, config, "k6_client_codegen graph.json out.json")

        self.assertEqual(document["generatedBy"], "k6_client_codegen graph.json out.json")
        self.assertTrue(document["additionalProperties"]["taggedUnions"])
        self.assertEqual(document["supportingFiles"][0]["destination"], "index.ts")

        cat = next(m for m in document["models"] if m["model"]["classname"] == "Cat")
        self.assertTrue(cat["taggedUnions"])
        self.assertEqual(cat["tsImports"], [])
        pet_type = next(v for v in cat["model"]["vars"] if v["baseName"] == "petType")
        self.assertEqual(pet_type["discriminatorValue"], "cat")

        lizard = next(m for m in document["models"] if m["model"]["classname"] == "Lizard")
        self.assertEqual(lizard["model"]["vendorExtensions"]["x-discriminator-value"], "reptile")

        api = document["apis"][0]
        self.assertEqual(api["filename"], "petApi")
        add_pet = next(op for op in api["operations"] if op["operationId"] == "addPet")
        self.assertEqual(add_pet["consumes"], [{"isJson": True, "mediaType": "application/json"}])
        self.assertEqual(api["imports"][0], {"classname": "Pet", "import": "../model/pet", "filename": "../model/pet"})

        # The document must be plain JSON
        json.dumps(document)
