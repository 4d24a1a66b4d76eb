"""
==========================================================
BRANDING & IDENTITY
==========================================================
Change these values to rebrand the admin backend.
The SystemSettings defaults read from here.
"""

# --- Core Identity ---
SITE_NAME = "JobPortal Admin"

# --- Company Info ---
COMPANY_EMAIL = "support@jobportal.example"
