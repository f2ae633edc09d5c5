"""
gltfxmp CLI - Command-line interface for glTF packet metadata
"""

import click
import logging
import sys
from gltfxmp import __version__
from gltfxmp.convert import update_file, clear_file, load_document
from gltfxmp.exceptions import GltfXmpError, NoMetadataFoundError
from gltfxmp.packets import PacketAssignment, SchemaKind, get_schema, render_report


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("gltfxmp")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if logger.hasHandlers():
        logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
    logger.addHandler(handler)


def _schema(legacy: bool):
    return get_schema(SchemaKind.legacy if legacy else SchemaKind.structured)


def _parse_assignments(ctx, param, values):
    try:
        return [PacketAssignment.parse(v) for v in values]
    except ValueError as e:
        raise click.BadParameter(str(e))


def _fail(prefix: str, e: Exception, verbose: bool) -> None:
    click.secho(f"{prefix}: {e}", fg='red', err=True)
    if verbose:
        import traceback
        traceback.print_exc()
    sys.exit(1)


legacy_option = click.option('--legacy', is_flag=True, help='Use the legacy KHR_xmp extension instead of KHR_xmp_json_ld')
verbose_option = click.option('--verbose', '-v', is_flag=True, help='Verbose logging')
overwrite_option = click.option(
    '--allow-overwrite', is_flag=True, envvar='GLTFXMP_ALLOW_OVERWRITE',
    help='Allow overwriting an existing output file. Use at your own risk!'
)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    gltfxmp - Add, remove and list XMP packet metadata in glTF files.

    Examples:
        gltfxmp apply model.glb tagged.glb --json metadata.json
        gltfxmp apply scene.gltf out.gltf -j meta.json --apply-to meshes:1
        gltfxmp list tagged.glb
    """
    pass


@cli.command()
@click.argument('input_path')
@click.argument('output_path')
@click.option('-j', '--json', 'metadata_path', required=True, help='Metadata JSON file with the packets')
@click.option(
    '-a', '--apply-to', 'assignments', multiple=True, default=['asset:0'],
    callback=_parse_assignments, show_default=True,
    help='CATEGORY:INDEX to tag (asset, animations, images, materials, meshes, nodes, scenes). Repeatable.'
)
@click.option('--strict', is_flag=True, help='Fail when a category has no entities instead of skipping it')
@legacy_option
@overwrite_option
@verbose_option
def apply(input_path, output_path, metadata_path, assignments, strict, legacy, allow_overwrite, verbose):
    """
    Write packets into a glTF/GLB file and tag entities with them.

    Existing packet references are replaced.

    Examples:
        gltfxmp apply model.glb tagged.glb -j metadata.json
        gltfxmp apply model.gltf tagged.gltf -j metadata.json -a asset:0 -a nodes:1
    """
    _configure_logging(verbose)
    try:
        schema = _schema(legacy)
        if verbose:
            click.echo(f"Applying {schema.extension_name}: {input_path} → {output_path}")

        update_file(
            input_path, output_path, metadata_path, schema, assignments,
            strict=strict, allow_overwrite=allow_overwrite
        )

        click.secho(f"✓ Success! Metadata written to {output_path}", fg='green')

    except (FileNotFoundError, FileExistsError, GltfXmpError, ValueError) as e:
        _fail("Error", e, verbose)
    except OSError as e:
        _fail("IO Error", e, verbose)
    except Exception as e:
        _fail("Unexpected error", e, verbose)


@cli.command()
@click.argument('input_path')
@click.argument('output_path')
@legacy_option
@overwrite_option
@verbose_option
def clear(input_path, output_path, legacy, allow_overwrite, verbose):
    """
    Remove every packet reference from a glTF/GLB file.

    The root packets and extensionsUsed are kept.
    """
    _configure_logging(verbose)
    try:
        clear_file(input_path, output_path, _schema(legacy), allow_overwrite=allow_overwrite)
        click.secho(f"✓ Success! Cleared file written to {output_path}", fg='green')

    except (FileNotFoundError, FileExistsError, GltfXmpError, ValueError) as e:
        _fail("Error", e, verbose)
    except OSError as e:
        _fail("IO Error", e, verbose)
    except Exception as e:
        _fail("Unexpected error", e, verbose)


@cli.command(name='list')
@click.argument('input_path')
@legacy_option
@verbose_option
def list_packets(input_path, legacy, verbose):
    """
    List the packets of a glTF/GLB file and where they are applied.

    Examples:
        gltfxmp list tagged.glb
        gltfxmp list old.gltf --legacy
    """
    _configure_logging(verbose)
    try:
        document = load_document(input_path)
        report = render_report(document, _schema(legacy))
        click.echo(report.format())

    except NoMetadataFoundError as e:
        click.secho(str(e), fg='yellow', err=True)
        sys.exit(1)
    except (FileNotFoundError, GltfXmpError, ValueError) as e:
        _fail("Error", e, verbose)
    except OSError as e:
        _fail("IO Error", e, verbose)
    except Exception as e:
        _fail("Unexpected error", e, verbose)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
