from dealbrief.config.providers import OpenAIEndpointResolver
from dealbrief.config.settings import Settings
from dealbrief.generation.base import BaseGenerationClient
from dealbrief.generation.example_client_adapter import ExampleGenerationAdapter
from dealbrief.generation.openai_client_adapter import OpenAIGenerationAdapter


class GenerationClientFactory:
    """Creates the configured streaming generation client."""

    @classmethod
    def create(cls, settings: Settings) -> BaseGenerationClient:
        provider = settings.generation_provider.lower()
        if provider == "example":
            return ExampleGenerationAdapter()
        base_url = OpenAIEndpointResolver.base_url(provider, settings)
        return OpenAIGenerationAdapter(
            api_key=OpenAIEndpointResolver.api_key(provider, settings),
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=base_url,
        )
