"""
ProxyLens - Proxy chain client address resolution

Entry point for running as a module:
    python -m proxylens resolve <peer> -t <trust>
"""

from .cli import main

if __name__ == '__main__':
    main()
