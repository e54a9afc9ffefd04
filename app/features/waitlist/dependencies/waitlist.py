from fastapi import Depends

from app.platform.config import Settings, get_settings
from app.platform.services.email import ResendMailer
from app.platform.services.supabase import SupabaseStore


def get_supabase_store(settings: Settings = Depends(get_settings)) -> SupabaseStore:
    return SupabaseStore(settings)


def get_mailer(settings: Settings = Depends(get_settings)) -> ResendMailer:
    return ResendMailer(settings)
