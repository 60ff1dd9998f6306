"""tomato: a Pomodoro timer served over local HTTP."""

__version__ = "1.2.0"
