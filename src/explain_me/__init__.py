"""explain-me — explain source code with a local llama.cpp model.

Forwards source files to the ``llama-cli`` binary and prints the
model's answer, with an interactive chat mode on the same binary.
"""

from explain_me.version import __version__

__all__: list[str] = ["__version__"]
