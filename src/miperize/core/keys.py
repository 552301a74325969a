"""Shared tag and attribute names to avoid magic strings across the rewriters."""

from __future__ import annotations

# Source tags
TAG_IMG = "img"
TAG_IFRAME = "iframe"
TAG_AUDIO = "audio"

# Framework tags
TAG_MIP_IMG = "mip-img"
TAG_MIP_ANIM = "mip-anim"
TAG_MIP_IFRAME = "mip-iframe"
TAG_MIP_AUDIO = "mip-audio"

# Attributes / config keys
K_SRC = "src"
K_WIDTH = "width"
K_HEIGHT = "height"
K_LAYOUT = "layout"
K_SANDBOX = "sandbox"

# Layout values
LAYOUT_FIXED = "fixed"
LAYOUT_RESPONSIVE = "responsive"
