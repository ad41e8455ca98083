"""
Applications Package für den Player Catalog

Enthält die Kommandozeilen-Einstiegspunkte.
"""
