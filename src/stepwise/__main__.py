from stepwise.cli.app import app

app()
