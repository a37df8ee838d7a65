"""Allow running as: python -m microworld"""

from microworld.cli import main

main()
