# site_backend/api/__init__.py
