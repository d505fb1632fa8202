import json

import click

from .pipeline import (
    CoreTypesError,
    EmitOptions,
    ParseOptions,
    convert_core_types_to_typescript,
    convert_typescript_to_core_types,
)
from .pipeline.core_types import document_to_dict


def load_config(path, options_class):
    """Load emit or parse options from a JSON config file."""
    with open(path) as f:
        try:
            return options_class.from_dict(json.load(f))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--config") from e


@click.group()
def core_types_ts():
    """Convert core types documents to TypeScript and back."""


@core_types_ts.command("to-ts")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--use-unknown", is_flag=True, default=False, help="Spell the top type as `unknown` instead of `any`")
@click.option("--no-descriptive-header", is_flag=True, default=False, help="Do not write the generated-file banner")
@click.option("--user-package", default=None, type=str)
@click.option("--user-package-url", default=None, type=str)
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(resolve_path=True))
def to_ts(config, use_unknown, no_descriptive_header, user_package, user_package_url, path, output):
    with open(path) as f:
        document = json.load(f)

    if config is not None:
        options = load_config(config, EmitOptions)
    else:
        options = EmitOptions()

    # CLI flags override the config file when set
    if use_unknown:
        options.use_unknown = True
    if no_descriptive_header:
        options.no_descriptive_header = True
    if user_package:
        options.user_package = user_package
    if user_package_url:
        options.user_package_url = user_package_url

    try:
        out = convert_core_types_to_typescript(document, options).data
    except CoreTypesError as e:
        raise click.ClickException(str(e)) from e

    with open(output, "w") as f:
        f.write(out)


@core_types_ts.command("from-ts")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(resolve_path=True))
def from_ts(config, path, output):
    with open(path) as f:
        source = f.read()

    if config is not None:
        options = load_config(config, ParseOptions)
    else:
        options = ParseOptions()

    try:
        document = convert_typescript_to_core_types(source, options).data
    except CoreTypesError as e:
        raise click.ClickException(str(e)) from e

    with open(output, "w") as f:
        json.dump(document_to_dict(document), f, indent=2)
        f.write("\n")
