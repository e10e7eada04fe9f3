"""Runtime wiring: settings, exchange and alert clients, scheduling."""
