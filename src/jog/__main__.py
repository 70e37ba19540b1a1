"""Allow ``python -m jog``."""

from jog.cli import main

main(prog_name="jog")
