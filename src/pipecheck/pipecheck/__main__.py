# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

import sys

from pipecheck.cli.validate import main

sys.exit(main())
