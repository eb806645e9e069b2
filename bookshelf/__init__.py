# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Personal book-tracking backend with cookie-based login sessions."""
