"""
Settings for LicenseKeyService.

Pick a module with DJANGO_SETTINGS_MODULE: ``base`` holds the shared
values, ``dev``, ``test`` and ``prod`` override them per environment.
"""
