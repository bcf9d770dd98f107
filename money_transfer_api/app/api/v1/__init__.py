"""Version 1 of the API: the routes the web client talks to."""
