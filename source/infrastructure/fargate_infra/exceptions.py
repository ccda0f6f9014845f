# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class InvalidArgumentError(ValueError):
    """Raised when construct arguments are missing, conflicting or reserved."""
