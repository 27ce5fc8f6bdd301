"""CourseGit Backend.

Course-management backend that provisions student groups on code-hosting
providers: repositories, teams and the local records that track them.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
