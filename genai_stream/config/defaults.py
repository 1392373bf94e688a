"""genai_stream.config.defaults
============================

Small, stable default values used when neither a config file, the
environment nor the caller supplies a value. Plain constants only; nothing
here imports from the rest of the package.
"""

from __future__ import annotations

# Model used by ``Client.generative_model()`` when no name is given.
DEFAULT_MODEL = "gemini-pro"

# ``None`` lets the GAPIC client pick its built-in endpoint.
DEFAULT_ENDPOINT = None

# Whether candidates first seen after the first chunk join the aggregate.
DEFAULT_INSERT_NEW_CANDIDATES = False

# Environment variable prefix shared by every setting.
ENV_PREFIX = "GENAI_STREAM"

# Points at an optional JSON or YAML file with a ``genai_stream`` section.
CONFIG_FILE_ENV = "GENAI_STREAM_CONFIG_FILE"
