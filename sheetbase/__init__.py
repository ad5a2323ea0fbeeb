"""SheetBase - бэкенд для многолистовых таблиц"""

__version__ = "1.0.0"
