"""
API Module
FastAPI Oberfläche: Spieler-Abfrage, Sync-Trigger, Health und Metriken
"""
