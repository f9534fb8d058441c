"""CARDZEN marketplace API."""
