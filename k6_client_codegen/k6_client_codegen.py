import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .config import CodeGeneratorConfig, FileNaming
from .errors import ConfigurationError
from .loader import GraphLoader, dump_document
from .pipeline import PostProcessor


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--file-naming",
    default=None,
    type=click.Choice([naming.value for naming in FileNaming]),
    help="Naming convention for the output files",
)
@click.option(
    "--tagged-unions/--no-tagged-unions",
    default=None,
    help="Use discriminators to create tagged unions instead of extending interfaces",
)
@click.option("--string-enums/--no-string-enums", default=None, help="Generate string enums instead of objects")
@click.option("--model-suffix", default=None, type=str, help="Class name suffix of models")
@click.option("--model-file-suffix", default=None, type=str, help="Suffix appended to model file names")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def k6_client_codegen(config, file_naming, tagged_unions, string_enums, model_suffix, model_file_suffix, verbose, path, output):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # Command line options override the config file
    overrides = {
        "file_naming": file_naming,
        "tagged_unions": tagged_unions,
        "string_enums": string_enums,
        "model_suffix": model_suffix,
        "model_file_suffix": model_file_suffix,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)

    try:
        processor = PostProcessor(config)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint=e.argument) from e

    with open(path) as f:
        document = json.load(f)
    graph, bundles = GraphLoader().load(document)

    models, bundles = processor.run(graph, bundles)

    out = dump_document(models, bundles, processor.config, reconstruct_command_line(k6_client_codegen))
    with open(output, "w") as f:
        json.dump(out, f, indent=2)
        f.write("\n")
