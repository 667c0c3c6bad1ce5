from .conv import parse_date, to_dec

__all__ = ["to_dec", "parse_date"]
