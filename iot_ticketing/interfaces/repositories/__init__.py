from iot_ticketing.interfaces.repositories.record_store import RecordStore

__all__ = ["RecordStore"]
