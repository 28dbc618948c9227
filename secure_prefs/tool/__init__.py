"""Command line tool for inspecting and editing secure-prefs stores."""
