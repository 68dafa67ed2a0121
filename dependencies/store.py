# dependencies/store.py

from fastapi import Depends, HTTPException
from supabase import Client

from core.config import settings
from core.document_store import DocumentStore, SupabaseDocumentStore
from core.supabase_client import get_supabase_client
from services.finance import FinanceWorkflow
from services.inventory_ledger import InventoryLedger


def get_supabase() -> Client:
    client = get_supabase_client()
    if client is None:
        raise HTTPException(500, "Database not initialized")
    return client


def get_store(client: Client = Depends(get_supabase)) -> DocumentStore:
    """Per-request store handle. Tests swap this out via dependency_overrides."""
    return SupabaseDocumentStore(client)


def get_ledger(store: DocumentStore = Depends(get_store)) -> InventoryLedger:
    return InventoryLedger(store, max_attempts=settings.DISTRIBUTION_MAX_ATTEMPTS)


def get_finance(store: DocumentStore = Depends(get_store)) -> FinanceWorkflow:
    return FinanceWorkflow(store)
