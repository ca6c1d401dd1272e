import logging
from collections import namedtuple

import click

from .extractor import DEFAULT_DOMAIN, is_domain_name


def maybe_exit(ctx, exit_code=1):
    if not ctx.obj.debug:
        ctx.exit(exit_code)


def _check_domain(ctx, param, value):
    if not is_domain_name(value):
        raise click.BadParameter('{!r} can not be used as a file name'
                                 .format(value))
    return value


GlobalOptions = namedtuple('GlobalOptions', 'verbose debug')


@click.command()
@click.option('-v', '--verbose', is_flag=True,
              help='Report progress and skipped call sites.')
@click.option('--debug', is_flag=True,
              help='Debug logging, errors are raised with tracebacks.')
@click.option('-d', '--default-domain', default=DEFAULT_DOMAIN,
              show_default=True, callback=_check_domain,
              help='Domain for calls which do not specify one.')
@click.argument('path', type=click.Path(exists=True))
@click.argument('output_dir', type=click.Path(exists=True, file_okay=False),
                default='.')
@click.pass_context
def cli(ctx, verbose, debug, default_domain, path, output_dir):
    """Extract translatable strings from PATH into OUTPUT_DIR.

    PATH is a source file or a directory, every source file found at that
    directory level is processed. One catalog is written per domain, as
    OUTPUT_DIR/<domain>.po"""
    from .errors import Errors, UserError
    from .parser import parse_path, ParseError
    from .extractor import Extractor
    from .catalog import Catalogs, write_messages
    from .storage import FileSystemStorage

    ctx.obj = GlobalOptions(verbose, debug)
    if debug:
        logging.basicConfig(level=logging.DEBUG)
    elif verbose:
        logging.basicConfig(level=logging.INFO)

    errors = Errors()
    try:
        node = parse_path(path, errors)
    except ParseError as e:
        click.echo('Failed to parse source file: {}'.format(e), err=True)
        maybe_exit(ctx)
        raise

    try:
        messages = Extractor.extract(node, default_domain, errors)
        with Catalogs(FileSystemStorage(output_dir)) as catalogs:
            count = write_messages(catalogs, messages)
    except UserError as e:
        click.echo('Failed to extract messages: {}'.format(e), err=True)
        maybe_exit(ctx)
        raise

    if verbose:
        for warning in errors.warnings:
            click.echo('{}: warning: {}'.format(warning.location,
                                                 warning.message),
                       err=True)
        click.echo('Extracted {} messages into {} catalogs'
                   .format(count, len(catalogs.domains)), err=True)


if __name__ == '__main__':
    cli.main(prog_name='python -m xgotext')
