from cronlens.cli.main import app

app()
