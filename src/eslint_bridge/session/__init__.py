# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Editor-facing orchestration of lint, fix and debug actions."""
