import sys

from unipm.app import UnipmApp


def main():
    """ Entrypoint when is installed via pip """
    initial = " ".join(sys.argv[1:]) or None
    app = UnipmApp(initial_command=initial)
    app.run()

# Development mode
if __name__ == "__main__":
    main()
