"""Allow `python -m npmctl`."""

from npmctl.main import app

app(prog_name="npmctl")
