from daylink.ui.cli import run

run()
