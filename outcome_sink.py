from abc import ABC, abstractmethod


class OutcomeSink(ABC):
    """Receives what the engine decides: victory, defeat and the background tint."""

    @abstractmethod
    def on_victory(self):
        pass

    @abstractmethod
    def on_defeat(self):
        pass

    @abstractmethod
    def set_background_color(self, color: tuple[int, int, int]):
        pass
