# Copyright (c) fsusage-analyzer Contributors.
