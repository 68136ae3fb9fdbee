"""KOSHA 스마트검색 게이트웨이"""

__version__ = "1.0.0"
