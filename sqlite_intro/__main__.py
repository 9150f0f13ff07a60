from sqlite_intro.cli import cli

if __name__ == "__main__":
    cli()
