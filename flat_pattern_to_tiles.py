#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tile a flat pattern outline onto printable sheets.
"""

import flat_pattern_tiler.cli


if __name__ == "__main__":
	flat_pattern_tiler.cli.main()
