"""Database table models and connection helpers."""