"""Lead management API with realtime assignment notifications."""
