from .dispatch import AgentDispatcher, Dispatcher, LocalDispatcher

__all__ = ["AgentDispatcher", "Dispatcher", "LocalDispatcher"]
