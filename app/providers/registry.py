# app/providers/registry.py — provider selection from configuration

from __future__ import annotations

from app.config import Settings, get_settings
from app.providers.apollo import ApolloAdapter
from app.providers.base import ProviderAdapter, ProviderConfig, RequestStyle
from app.providers.common import SUPPORTED_PROVIDERS
from app.providers.peopledatalabs import PeopleDataLabsAdapter
from app.providers.proxycurl import ProxycurlAdapter
from app.utils.exceptions import UnsupportedProviderError


def provider_config(settings: Settings, name: str) -> ProviderConfig:
    if name == "peopledatalabs":
        return ProviderConfig(
            name=name,
            credential_ref="peopledatalabs_api_key",
            endpoint=settings.peopledatalabs_api_url,
            request_style=RequestStyle.QUERY_DSL,
        )
    if name == "proxycurl":
        return ProviderConfig(
            name=name,
            credential_ref="proxycurl_api_key",
            endpoint=settings.proxycurl_api_url,
            request_style=RequestStyle.QUERY_PARAMS,
        )
    if name == "apollo":
        return ProviderConfig(
            name=name,
            credential_ref="apollo_api_key",
            endpoint=settings.apollo_api_url,
            request_style=RequestStyle.JSON_FILTER,
        )
    raise UnsupportedProviderError(name, SUPPORTED_PROVIDERS)


def build_provider_adapter(settings: Settings) -> ProviderAdapter:
    name = settings.search_provider
    config = provider_config(settings, name)
    if name == "proxycurl":
        return ProxycurlAdapter(config, default_country=settings.proxycurl_default_country)
    if name == "apollo":
        return ApolloAdapter(config)
    return PeopleDataLabsAdapter(config)


def get_provider_adapter() -> ProviderAdapter:
    return build_provider_adapter(get_settings())
