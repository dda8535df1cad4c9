"""DI container: composition root for the dashboard process.

Every collaborator is a singleton; tests override providers (e.g. the session
storage or the client's transport) before the app starts.
"""
from dependency_injector import containers, providers

from trade_journal.client import ClientErrorMapper, JournalApiClient
from trade_journal.config import Settings
from trade_journal.polling import PricePoller
from trade_journal.session import FileSessionStorage, Navigator, SessionStore
from trade_journal.views import ViewRegistry


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings.from_env)

    http_transport = providers.Object(None)

    session_storage = providers.Singleton(
        FileSessionStorage, path=settings.provided.session_file
    )
    navigator = providers.Singleton(Navigator)

    api_client = providers.Singleton(
        JournalApiClient,
        base_url=settings.provided.api_url,
        session_storage=session_storage,
        transport=http_transport,
    )
    session_store = providers.Singleton(
        SessionStore,
        client=api_client,
        storage=session_storage,
        navigator=navigator,
    )

    price_poller = providers.Singleton(
        PricePoller, fetch_prices=api_client.provided.list_stock_prices
    )
    views = providers.Singleton(
        ViewRegistry,
        client=api_client,
        poller=price_poller,
        navigator=navigator,
    )

    error_mapper = providers.Singleton(ClientErrorMapper)
