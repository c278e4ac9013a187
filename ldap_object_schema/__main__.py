"""Module entrypoint for `python -m ldap_object_schema`.

Delegates to the CLI implementation.
"""

from .cli import main


if __name__ == "__main__":
    main()
