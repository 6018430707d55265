"""
eventgraph CLI package.

Each module under ``commands/`` is one sub-command and exposes ``SUMMARY``,
``register_args(parser)`` and ``main(args) -> int``.
"""
from ._output import OutputFormatter
from ._args import add_graph_file_arg, add_json_flag, add_repo_root_flag

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_graph_file_arg",
]
