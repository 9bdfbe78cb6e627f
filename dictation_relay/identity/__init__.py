from .file import FileIdentityLookup
from .lookup import IdentityLookup
from .supabase import SupabaseIdentityLookup

__all__ = ["FileIdentityLookup", "IdentityLookup", "SupabaseIdentityLookup"]
