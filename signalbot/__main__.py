"""Allow ``python -m signalbot``."""

from signalbot.app.main import main

main()
