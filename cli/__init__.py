"""Command line client for the smart power tracker API."""
