from dentrecon.cli.main import app

app()
