# Palettes run darkest-looking glyph first, lightest last

DEFAULT = "M80V1i:*|, "

SHORT = "@%#*+=-:. "

LONG = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "

BLOCKS = "█▓▒░ "

PRESETS = {"default": DEFAULT, "short": SHORT, "long": LONG, "blocks": BLOCKS}
