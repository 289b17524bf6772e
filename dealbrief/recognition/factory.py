from dealbrief.config.providers import OpenAIEndpointResolver
from dealbrief.config.settings import Settings
from dealbrief.recognition.base import BaseRecognitionClient
from dealbrief.recognition.example_client_adapter import ExampleRecognitionAdapter
from dealbrief.recognition.openai_client_adapter import OpenAIRecognitionAdapter


class RecognitionClientFactory:
    """Creates the configured recognition client."""

    @classmethod
    def create(cls, settings: Settings) -> BaseRecognitionClient:
        provider = settings.recognition_provider.lower()
        if provider == "example":
            return ExampleRecognitionAdapter()
        base_url = OpenAIEndpointResolver.base_url(provider, settings)
        return OpenAIRecognitionAdapter(
            api_key=OpenAIEndpointResolver.api_key(provider, settings),
            model=settings.recognition_model_name,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=base_url,
        )
