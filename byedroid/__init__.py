"""Android workflow helpers: Gradle inference, project config, logcat parsing and filtering, Gradle and scrcpy processes, and terminal text formatting."""

__version__ = "0.9.0"