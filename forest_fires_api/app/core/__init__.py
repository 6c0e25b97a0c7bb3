"""Configuration, logging, error mapping and the record store."""
