from iot_ticketing.interfaces.providers.data_storage import DataStorageProvider
from iot_ticketing.interfaces.providers.llm import LLMProvider

__all__ = ["DataStorageProvider", "LLMProvider"]
