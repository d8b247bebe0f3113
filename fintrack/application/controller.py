"""Finance controller - the single owner of application state."""

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable, List, Optional, TypeVar

import structlog

from fintrack.core.config import Settings, settings as default_settings
from fintrack.domain.entities import (
    FilterState,
    PeriodFilter,
    SyncCredentials,
    Theme,
    Transaction,
    TypeFilter,
    is_positive_amount,
)
from fintrack.domain.exceptions import InvalidBudgetException, PersistenceException
from fintrack.domain.interfaces import KeyValueStore, RemoteDocumentClient
from fintrack.service.analytics import (
    AnalyticsSettings,
    analytics_settings as default_analytics,
    apply_filters,
    budget_progress,
    build_insights,
    calculate_totals,
    category_breakdown,
    month_scope,
    monthly_series,
    quick_stats,
)
from fintrack.application.dto import (
    ConnectOutcome,
    DashboardView,
    ExportResult,
    ImportMode,
    ImportResult,
    MutationResult,
    NewTransactionRequest,
    SyncResult,
)
from fintrack.application.services import (
    IdGenerator,
    MutationEvent,
    PersistenceService,
    SyncService,
    TransactionStore,
    TransferService,
)
from fintrack.application.state import AppState

logger = structlog.get_logger(__name__)

T = TypeVar("T")

CONNECT_MESSAGES = {
    ConnectOutcome.PULLED: "Connected and synced from existing Gist! ☁️",
    ConnectOutcome.PUSHED: "Synced to existing Gist! ☁️",
    ConnectOutcome.CREATED: "Created new Gist and synced! ☁️",
}


class FinanceController:
    """
    Wires the store, persistence, sync and aggregation together.

    Every store mutation runs three hooks in order: persist the list,
    schedule a remote push, recompute the dashboard view.
    """

    def __init__(
        self,
        store: TransactionStore,
        persistence: PersistenceService,
        sync: SyncService,
        transfer: TransferService,
        state: Optional[AppState] = None,
        analytics: AnalyticsSettings = default_analytics,
        today: Callable[[], date] = date.today,
    ):
        self._store = store
        self._persistence = persistence
        self._sync = sync
        self._transfer = transfer
        self._analytics = analytics
        self._today = today
        self.state = state or AppState(
            filters=FilterState(selected_month=today().strftime("%Y-%m")),
        )

        store.add_hook(self._persist_transactions)
        store.add_hook(sync.on_mutation)
        store.add_hook(self._recompute)

        self.state.view = self.compute_view()

    @classmethod
    def from_storage(
        cls,
        kv_store: KeyValueStore,
        remote_client: RemoteDocumentClient,
        config: Settings = default_settings,
        analytics: AnalyticsSettings = default_analytics,
        today: Callable[[], date] = date.today,
        id_generator: Optional[IdGenerator] = None,
    ) -> "FinanceController":
        """
        Build a controller from whatever local storage holds.

        Each slot loads independently; a slot that cannot be read falls
        back to its default and sets the storage warning.
        """
        persistence = PersistenceService(kv_store, default_budget=config.default_monthly_budget)
        warnings: List[str] = []

        def load(loader: Callable[[], T], default: T) -> T:
            try:
                return loader()
            except PersistenceException as e:
                logger.error("storage_load_failed", key=e.key, error=e.message)
                warnings.append(e.message)
                return default

        transactions = load(persistence.load_transactions, [])
        budget = load(persistence.load_budget, config.default_monthly_budget)
        theme = load(persistence.load_theme, Theme.DARK)
        credentials = load(persistence.load_credentials, SyncCredentials())

        store = TransactionStore(transactions, id_generator=id_generator)
        sync = SyncService(
            remote_client,
            store,
            credentials=credentials,
            debounce_seconds=config.sync_debounce_seconds,
        )
        transfer = TransferService(store, app_version=config.export_app_version)

        state = AppState(
            filters=FilterState(selected_month=today().strftime("%Y-%m")),
            budget=budget,
            theme=theme,
            storage_warning=storage_warning(warnings[0]) if warnings else None,
        )

        logger.info(
            "state_loaded",
            transactions=len(transactions),
            sync_enabled=credentials.is_enabled,
        )
        return cls(store, persistence, sync, transfer, state, analytics, today)

    @property
    def store(self) -> TransactionStore:
        return self._store

    @property
    def sync(self) -> SyncService:
        return self._sync

    # === Views ===

    def compute_view(self) -> DashboardView:
        """Recompute every derived view from the full list and filters."""
        transactions = self._store.list()
        filters = self.state.filters
        today = self._today()
        scoped = month_scope(transactions, filters)

        return DashboardView(
            filters=filters,
            totals=calculate_totals(scoped),
            breakdown=category_breakdown(scoped),
            monthly=monthly_series(transactions, today, self._analytics),
            budget=budget_progress(transactions, self.state.budget, today, self._analytics),
            insights=build_insights(scoped, filters, self._analytics),
            quick_stats=quick_stats(transactions, today),
            transactions=apply_filters(transactions, filters, today, self._analytics),
            storage_warning=self.state.storage_warning,
        )

    @property
    def view(self) -> DashboardView:
        if self.state.view is None:
            self.state.view = self.compute_view()
        return self.state.view

    def list_transactions(self) -> List[Transaction]:
        """Transactions passing every active filter, newest first."""
        return self.view.transactions

    # === Transactions ===

    def add_transaction(self, request: NewTransactionRequest) -> MutationResult:
        transaction = self._store.add(request)

        # A new entry should be visible, so the narrowing filters reset
        self.set_filters(search="", type=TypeFilter.ALL, period=PeriodFilter.ALL)

        sign = "+" if transaction.is_income else "-"
        label = "Income" if transaction.is_income else "Expense"
        emoji = "💰" if transaction.is_income else "💸"
        return self._result(
            f"{label} added: {sign}${transaction.amount:.2f} {emoji}",
            transaction=transaction,
        )

    def delete_transaction(self, transaction_id: int) -> MutationResult:
        if not self._store.remove(transaction_id):
            return self._result("Transaction not found", changed=False)
        return self._result("Transaction deleted! 🗑️")

    def toggle_split(self, transaction_id: int) -> MutationResult:
        transaction = self._store.toggle_split(transaction_id)
        if transaction is None:
            return self._result("Transaction not found", changed=False)
        message = "Marked as Splitwise 👥" if transaction.is_splitwise else "Marked as Personal 👤"
        return self._result(message, transaction=transaction)

    def clear_transactions(self) -> MutationResult:
        if self._store.clear() == 0:
            return self._result("No transactions to clear! 📋", changed=False)
        return self._result("All transactions cleared! 🧹")

    # === Filters ===

    def set_filters(self, **changes: Any) -> DashboardView:
        """
        Update any subset of the filter dimensions and recompute.

        Raises:
            TypeError: If a key is not a filter dimension
        """
        self.state.filters = replace(self.state.filters, **changes)
        return self._refresh()

    def reset_filters(self) -> DashboardView:
        """Back to the current month with every other filter cleared."""
        self.state.filters = FilterState(selected_month=self._today().strftime("%Y-%m"))
        return self._refresh()

    # === Settings ===

    def set_budget(self, amount: float) -> MutationResult:
        if not is_positive_amount(amount):
            raise InvalidBudgetException(amount)

        self.state.budget = float(amount)
        self._save(self._persistence.save_budget, self.state.budget)
        self._refresh()
        logger.info("budget_updated", budget=self.state.budget)
        return self._result(f"Budget set to ${self.state.budget:,.2f}! 🎯")

    def set_theme(self, theme: Theme) -> MutationResult:
        self.state.theme = theme
        self._save(self._persistence.save_theme, theme)
        message = "Light mode activated! ☀️" if theme == Theme.LIGHT else "Dark mode activated! 🌙"
        return self._result(message)

    def toggle_theme(self) -> MutationResult:
        return self.set_theme(Theme.DARK if self.state.theme == Theme.LIGHT else Theme.LIGHT)

    # === Remote sync ===

    async def connect(self, credential: str, document_id: Optional[str] = None) -> SyncResult:
        outcome = await self._sync.connect(credential, document_id)
        self._save(self._persistence.save_credentials, self._sync.credentials)
        return SyncResult(
            message=CONNECT_MESSAGES[outcome],
            status=self._sync.status(),
            outcome=outcome,
            transaction_count=len(self._store),
        )

    def disconnect(self) -> SyncResult:
        self._sync.disconnect()
        self._save(self._persistence.save_credentials, self._sync.credentials)
        return SyncResult(message="Disconnected from GitHub! 🔌", status=self._sync.status())

    async def push_now(self) -> SyncResult:
        count = await self._sync.push_now()
        return SyncResult(
            message="Data saved to cloud! ☁️",
            status=self._sync.status(),
            transaction_count=count,
        )

    async def pull(self) -> SyncResult:
        count = await self._sync.pull()
        return SyncResult(
            message="Data synced from cloud! ☁️",
            status=self._sync.status(),
            transaction_count=count,
        )

    async def bootstrap(self, credential: str, document_id: str) -> bool:
        """
        Adopt credentials handed over out of band, then pull once.

        The credentials are stored before the pull so they survive a
        failed first sync.
        """
        self._sync.set_credentials(SyncCredentials(credential, document_id))
        self._save(self._persistence.save_credentials, self._sync.credentials)
        logger.info("sync_bootstrapped", document_id=document_id)
        return await self._sync.startup_sync()

    async def startup(self) -> bool:
        return await self._sync.startup_sync()

    async def shutdown(self) -> None:
        await self._sync.shutdown()

    # === Import / export ===

    def export_data(self, now: Optional[datetime] = None) -> ExportResult:
        return self._transfer.export(now)

    def import_data(self, document: Any, mode: ImportMode) -> ImportResult:
        return self._transfer.import_document(document, mode)

    # === Hooks ===

    def _persist_transactions(self, event: MutationEvent) -> None:
        self._save(self._persistence.save_transactions, self._store.list())

    def _recompute(self, event: MutationEvent) -> None:
        self._refresh()

    # === Helpers ===

    def _refresh(self) -> DashboardView:
        self.state.view = self.compute_view()
        return self.state.view

    def _save(self, writer: Callable[[T], None], value: T) -> bool:
        """Write one slot; on failure keep going on in-memory state."""
        try:
            writer(value)
        except PersistenceException as e:
            logger.error("storage_write_failed", key=e.key, error=e.message)
            self.state.storage_warning = storage_warning(e.message)
            return False

        self.state.storage_warning = None
        return True

    def _result(
        self,
        message: str,
        changed: bool = True,
        transaction: Optional[Transaction] = None,
    ) -> MutationResult:
        return MutationResult(
            message=message,
            changed=changed,
            transaction=transaction,
            storage_warning=self.state.storage_warning,
        )


def storage_warning(detail: str) -> str:
    return f"Changes are kept in memory but could not be saved locally ({detail})"
