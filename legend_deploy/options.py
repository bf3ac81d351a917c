from pathlib import Path

import click

from legend_deploy.constants import DEFAULT_PARAMS_FILEPATH

params_filepath_option = click.option(
    "--params-filepath",
    "-p",
    help="Deployment parameters YAML file.",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=DEFAULT_PARAMS_FILEPATH,
    show_default=True,
)

autosign_option = click.option(
    "--autosign",
    help="Automatically sign transactions.",
    is_flag=True,
)

verify_option = click.option(
    "--verify",
    help="Publish contract sources to the block explorer.",
    is_flag=True,
)
