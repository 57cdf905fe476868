"""Parsers for kubectl JSON output"""

from .base import ParserError, parse_ingress, parse_secret_data, parse_service

__all__ = ['ParserError', 'parse_ingress', 'parse_secret_data', 'parse_service']
