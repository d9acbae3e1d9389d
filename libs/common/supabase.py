"""Supabase client factories.

The admin client uses the service-role key and is shared. The public client
is built per call: password sign-in stores the session on the client, so a
shared instance would leak one user's session into another request.
"""

from functools import lru_cache

from supabase import Client, create_client

from libs.common.config import get_settings


def get_supabase_client() -> Client:
    settings = get_settings()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)


@lru_cache
def get_supabase_admin_client() -> Client:
    settings = get_settings()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
