"""Entry point for python -m orders_api"""

from orders_api.cli import main

if __name__ == "__main__":
    main()
