"""
Veri senkronizasyon katmanı.

Her varlık tipi (ürünler, ayarlar, mesajlar, profiller) için abonelik:
abone olunduğunda güncel tam liste hemen gönderilir, sonrasında her
değişiklikte tüm liste yeniden gönderilir (artımlı diff yok). Aynı liste
birden fazla kez gelebilir; aboneler idempotent olmalıdır.

Yazma işlemleri "ateşle ve unut" şeklindedir: hatalar loglanır, çağırana
exception olarak dönmez. Tutarlılık sinyali yazma çağrısının dönüşü değil,
bir sonraki abonelik bildirimidir.
"""
from __future__ import annotations

import time
import uuid
from dataclasses import replace
from typing import Any, Callable, Optional

from config.settings import (
    MESSAGES_TABLE,
    PRODUCTS_TABLE,
    PROFILES_TABLE,
    SETTINGS_ROW_ID,
    SETTINGS_TABLE,
    SUPABASE_KEY,
    SUPABASE_URL,
)
from models.product import Product
from models.shop import Message, ShopSettings, UserProfile
from sync.mapping import (
    decode_message,
    decode_product,
    decode_profile,
    decode_settings,
    encode_message,
    encode_product,
    encode_profile,
    encode_settings,
)
from utils.logger import logger


class Entity:
    PRODUCTS = PRODUCTS_TABLE
    SETTINGS = SETTINGS_TABLE
    MESSAGES = MESSAGES_TABLE
    PROFILES = PROFILES_TABLE


ALL_ENTITIES = (Entity.PRODUCTS, Entity.SETTINGS, Entity.MESSAGES, Entity.PROFILES)


def new_id() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


class Subscription:
    """subscribe() dönüşü; unsubscribe() ile bildirim durur."""

    def __init__(self, store: "SnapshotStore", entity: str, callback: Callable):
        self.store = store
        self.entity = entity
        self.callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.store._remove(self)
            self.active = False


class SnapshotStore:
    """
    Abonelik/yayın mantığı. Alt sınıflar sadece ham kayıt okuma/yazma
    yapar: _read_rows, _upsert_row, _delete_row.
    """

    is_remote = False

    def __init__(self):
        self._subscribers: dict[str, list[Subscription]] = {e: [] for e in ALL_ENTITIES}
        self._cache: dict[str, Any] = {}
        self.connected = False

    # ── Backend kancaları ─────────────────────────────────

    def _read_rows(self, table: str) -> list[dict]:
        raise NotImplementedError

    def _upsert_row(self, table: str, row: dict) -> None:
        raise NotImplementedError

    def _delete_row(self, table: str, row_id: str) -> None:
        raise NotImplementedError

    # ── Okuma ────────────────────────────────────────────

    @staticmethod
    def _decode_rows(entity: str, rows: list[dict], decode: Callable) -> list:
        """Bozuk kayıt atlanır; listenin geri kalanı yayınlanmaya devam eder."""
        decoded = []
        for r in rows:
            try:
                decoded.append(decode(r))
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping malformed {entity} row {r.get('id')!r}: {e}")
        return decoded

    def _build_snapshot(self, entity: str, rows: list[dict]):
        if entity == Entity.PRODUCTS:
            products = self._decode_rows(entity, rows, decode_product)
            return sorted(products, key=lambda p: p.id, reverse=True)
        if entity == Entity.MESSAGES:
            messages = self._decode_rows(entity, rows, decode_message)
            return sorted(messages, key=lambda m: m.timestamp)
        if entity == Entity.PROFILES:
            profiles = self._decode_rows(entity, rows, decode_profile)
            return sorted(profiles, key=lambda p: (p.name.lower(), p.id))
        if entity == Entity.SETTINGS:
            for r in rows:
                if r.get("id") == SETTINGS_ROW_ID:
                    return decode_settings(r)
            return None
        raise ValueError(f"Unknown entity: {entity}")

    def snapshot(self, entity: str):
        """Güncel tam liste. Okuma hatasında son önbellek (veya boş) döner."""
        try:
            snap = self._build_snapshot(entity, self._read_rows(entity))
        except Exception as e:
            logger.error(f"Failed to read {entity}: {e}")
            self.connected = False
            return self._cache.get(entity, None if entity == Entity.SETTINGS else [])
        self.connected = True
        self._cache[entity] = snap
        return snap

    def get_profiles(self) -> list[UserProfile]:
        return list(self.snapshot(Entity.PROFILES))

    # ── Abonelik ─────────────────────────────────────────

    def subscribe(self, entity: str, callback: Callable) -> Subscription:
        if entity not in self._subscribers:
            raise ValueError(f"Unknown entity: {entity}")
        sub = Subscription(self, entity, callback)
        self._subscribers[entity].append(sub)
        snap = self.snapshot(entity)
        if snap is not None:
            self._deliver(sub, snap)
        return sub

    def _remove(self, sub: Subscription) -> None:
        subs = self._subscribers.get(sub.entity, [])
        if sub in subs:
            subs.remove(sub)

    def subscriber_count(self, entity: str) -> int:
        return len(self._subscribers[entity])

    def _deliver(self, sub: Subscription, snap) -> None:
        payload = list(snap) if isinstance(snap, list) else snap
        try:
            sub.callback(payload)
        except Exception:
            logger.exception(f"Subscriber callback failed for {sub.entity}")

    def publish(self, entity: str) -> None:
        """Varlığın tam listesini tüm abonelere yeniden gönderir."""
        subs = list(self._subscribers[entity])
        if not subs:
            return
        snap = self.snapshot(entity)
        if snap is None:
            return
        for sub in subs:
            self._deliver(sub, snap)

    def refresh(self) -> None:
        for entity in ALL_ENTITIES:
            self.publish(entity)

    # ── Yazma (ateşle ve unut) ───────────────────────────

    def _write(self, entity: str, action: str, fn: Callable[[], None]) -> bool:
        try:
            fn()
        except Exception as e:
            logger.error(f"Failed to {action} in {entity}: {e}")
            return False
        self.publish(entity)
        return True

    def save_product(self, product: Product) -> Optional[Product]:
        if not product.id:
            product = replace(product, id=new_id())
        row = encode_product(product)
        ok = self._write(Entity.PRODUCTS, "save product", lambda: self._upsert_row(Entity.PRODUCTS, row))
        return product if ok else None

    def delete_product(self, product_id: str) -> bool:
        return self._write(
            Entity.PRODUCTS, "delete product", lambda: self._delete_row(Entity.PRODUCTS, product_id)
        )

    def update_settings(self, settings: ShopSettings) -> bool:
        row = encode_settings(settings)
        row["id"] = SETTINGS_ROW_ID
        return self._write(Entity.SETTINGS, "update settings", lambda: self._upsert_row(Entity.SETTINGS, row))

    def send_message(self, sender_id: str, recipient_id: str, text: str) -> Optional[Message]:
        message = Message(
            id=new_id(),
            sender_id=sender_id,
            recipient_id=recipient_id,
            text=text,
            timestamp=now_ms(),
        )
        row = encode_message(message)
        ok = self._write(Entity.MESSAGES, "send message", lambda: self._upsert_row(Entity.MESSAGES, row))
        return message if ok else None

    def delete_message(self, message_id: str) -> bool:
        return self._write(
            Entity.MESSAGES, "delete message", lambda: self._delete_row(Entity.MESSAGES, message_id)
        )

    def upsert_profile(self, profile: UserProfile) -> Optional[UserProfile]:
        if not profile.id:
            profile = replace(profile, id=new_id())
        row = encode_profile(profile)
        ok = self._write(Entity.PROFILES, "save profile", lambda: self._upsert_row(Entity.PROFILES, row))
        return profile if ok else None


class MemoryStore(SnapshotStore):
    """Süreç içi depo - demo modu ve testler için."""

    def __init__(self):
        super().__init__()
        self._tables: dict[str, dict[str, dict]] = {e: {} for e in ALL_ENTITIES}
        self.connected = True

    def _read_rows(self, table: str) -> list[dict]:
        return [dict(row) for row in self._tables[table].values()]

    def _upsert_row(self, table: str, row: dict) -> None:
        existing = self._tables[table].get(row["id"], {})
        self._tables[table][row["id"]] = {**existing, **row}

    def _delete_row(self, table: str, row_id: str) -> None:
        self._tables[table].pop(row_id, None)

    def is_empty(self) -> bool:
        return not any(self._tables.values())


class SupabaseStore(SnapshotStore):
    """Supabase tablolarına yazan depo. Her UI turunda refresh() çağrılır."""

    is_remote = True

    def __init__(self, client):
        super().__init__()
        self.client = client

    def _read_rows(self, table: str) -> list[dict]:
        res = self.client.table(table).select("*").execute()
        return list(res.data or [])

    def _upsert_row(self, table: str, row: dict) -> None:
        self.client.table(table).upsert(row).execute()

    def _delete_row(self, table: str, row_id: str) -> None:
        self.client.table(table).delete().eq("id", row_id).execute()


def is_supabase_configured() -> bool:
    return bool(SUPABASE_URL and SUPABASE_KEY)


def create_store() -> SnapshotStore:
    """Supabase ayarlıysa SupabaseStore, değilse boş MemoryStore."""
    if not is_supabase_configured():
        logger.warning("SUPABASE_URL or SUPABASE_KEY not set. Running with in-memory demo store.")
        return MemoryStore()

    from supabase import create_client

    client = create_client(SUPABASE_URL, SUPABASE_KEY)
    logger.info("Connected Supabase data store")
    return SupabaseStore(client)
