"""
Terminal dashboard for weatherfx.

Import the dashboard from weatherfx.tui.dashboard; this package module stays
import-light so the effects layer can use the color definitions.
"""
