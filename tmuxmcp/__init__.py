# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""tmuxmcp - drive interactive terminal programs over MCP using tmux."""

__version__ = "1.0.0"
