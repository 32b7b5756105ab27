from cli.main import filehasher_cli


if __name__ == '__main__':
    filehasher_cli()
