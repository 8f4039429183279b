from erudify.interface.cli import app

app()
