"""Ecosystem-aware parsing and comparison of package versions."""