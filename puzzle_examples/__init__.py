"""Example puzzle inputs, one `DD.txt` per day, shipped as package data."""
