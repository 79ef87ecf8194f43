from doc_checker.cli import app

app()
