from xwoba_matchups.cli.app import app

app()
