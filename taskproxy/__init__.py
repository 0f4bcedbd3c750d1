"""Owner-scoped Task/Category proxy over Supabase."""

__version__ = "1.0.0"
