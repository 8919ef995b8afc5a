"""SQLAlchemy-backed ledger source reading the GnuCash SQL schema."""

from sqlalchemy import text

from gnc_ledger.application.ports.database import DatabaseEnginePort
from gnc_ledger.application.ports.ledger_source import LedgerSourcePort
from gnc_ledger.domain.models.commodities import make_commodity_id
from gnc_ledger.domain.models.records import (
    AccountRecord,
    CommodityRecord,
    PriceRecord,
    SplitRecord,
    TransactionRecord,
)
from gnc_ledger.infrastructure.gnucash_templates import (
    TEMPLATE_NAMESPACE,
    TEMPLATE_ROOT_NAME,
)
from gnc_ledger.utils.decimal_utils import fraction_literal

# Accounts outside the scheduled-transaction template tree.
_REAL_ACCOUNT = """
    COALESCE(LOWER(c.namespace), '') <> :template_namespace
    AND NOT (a.account_type = 'ROOT' AND a.name = :template_root)
"""

_TEMPLATE_PARAMS = {
    "template_namespace": TEMPLATE_NAMESPACE,
    "template_root": TEMPLATE_ROOT_NAME,
}


class SqlAlchemyLedgerSource(LedgerSourcePort):
    """Ledger source backed by SQLAlchemy over the GnuCash tables."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the source.

        Args:
            db_port: Port providing access to the GnuCash engine.
        """
        self._db_port = db_port

    def _fetch(self, query, params: dict | None = None):
        engine = self._db_port.get_gnucash_engine()
        with engine.connect() as conn:
            return conn.execute(query, params or {}).all()

    @staticmethod
    def _commodity_id(namespace, mnemonic) -> str | None:
        if mnemonic is None:
            return None
        return make_commodity_id(namespace, mnemonic)

    def fetch_commodities(self) -> list[CommodityRecord]:
        query = text(
            """
            SELECT namespace, mnemonic, fullname, fraction
            FROM commodities
            WHERE LOWER(namespace) <> :template_namespace
            """
        )
        rows = self._fetch(
            query,
            {"template_namespace": TEMPLATE_NAMESPACE},
        )
        return [
            CommodityRecord(
                namespace=row.namespace,
                mnemonic=row.mnemonic,
                full_name=row.fullname,
                fraction=int(row.fraction or 100),
            )
            for row in rows
        ]

    def fetch_accounts(self) -> list[AccountRecord]:
        query = text(
            f"""
            SELECT
                a.guid,
                a.name,
                a.account_type,
                a.parent_guid,
                a.commodity_scu,
                a.description,
                c.namespace,
                c.mnemonic
            FROM accounts a
            LEFT JOIN commodities c ON c.guid = a.commodity_guid
            WHERE {_REAL_ACCOUNT}
            """
        )
        rows = self._fetch(query, _TEMPLATE_PARAMS)
        return [
            AccountRecord(
                guid=row.guid,
                name=row.name,
                account_type=row.account_type,
                commodity_id=self._commodity_id(row.namespace, row.mnemonic),
                parent_guid=row.parent_guid,
                commodity_scu=int(row.commodity_scu or 100),
                description=row.description,
            )
            for row in rows
        ]

    def fetch_transactions(self) -> list[TransactionRecord]:
        query = text(
            f"""
            SELECT
                t.guid,
                t.num,
                t.post_date,
                t.enter_date,
                t.description,
                cur.namespace,
                cur.mnemonic
            FROM transactions t
            JOIN commodities cur ON cur.guid = t.currency_guid
            WHERE NOT EXISTS (
                SELECT 1 FROM splits s WHERE s.tx_guid = t.guid
            )
            OR EXISTS (
                SELECT 1
                FROM splits s
                JOIN accounts a ON a.guid = s.account_guid
                LEFT JOIN commodities c ON c.guid = a.commodity_guid
                WHERE s.tx_guid = t.guid AND {_REAL_ACCOUNT}
            )
            """
        )
        rows = self._fetch(query, _TEMPLATE_PARAMS)
        return [
            TransactionRecord(
                guid=row.guid,
                currency_id=self._commodity_id(row.namespace, row.mnemonic),
                post_date=row.post_date,
                enter_date=row.enter_date,
                num=row.num,
                description=row.description,
            )
            for row in rows
        ]

    def fetch_splits(self) -> list[SplitRecord]:
        query = text(
            f"""
            SELECT
                s.guid,
                s.tx_guid,
                s.account_guid,
                s.memo,
                s.reconcile_state,
                s.value_num,
                s.value_denom,
                s.quantity_num,
                s.quantity_denom
            FROM splits s
            JOIN accounts a ON a.guid = s.account_guid
            LEFT JOIN commodities c ON c.guid = a.commodity_guid
            WHERE {_REAL_ACCOUNT}
            """
        )
        rows = self._fetch(query, _TEMPLATE_PARAMS)
        return [
            SplitRecord(
                guid=row.guid,
                transaction_guid=row.tx_guid,
                account_guid=row.account_guid,
                value=fraction_literal(row.value_num, row.value_denom),
                quantity=fraction_literal(
                    row.quantity_num,
                    row.quantity_denom,
                ),
                memo=row.memo,
                reconcile_state=row.reconcile_state or "n",
            )
            for row in rows
        ]

    def fetch_prices(self) -> list[PriceRecord]:
        query = text(
            """
            SELECT
                p.date,
                p.source,
                p.value_num,
                p.value_denom,
                com.namespace AS commodity_namespace,
                com.mnemonic AS commodity_mnemonic,
                cur.namespace AS currency_namespace,
                cur.mnemonic AS currency_mnemonic
            FROM prices p
            JOIN commodities com ON com.guid = p.commodity_guid
            JOIN commodities cur ON cur.guid = p.currency_guid
            ORDER BY p.date
            """
        )
        rows = self._fetch(query)
        return [
            PriceRecord(
                commodity_id=self._commodity_id(
                    row.commodity_namespace,
                    row.commodity_mnemonic,
                ),
                currency_id=self._commodity_id(
                    row.currency_namespace,
                    row.currency_mnemonic,
                ),
                date=row.date,
                value=fraction_literal(row.value_num, row.value_denom),
                source=row.source,
            )
            for row in rows
        ]


__all__ = ["SqlAlchemyLedgerSource"]
