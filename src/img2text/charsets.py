"""Predefined glyph catalogs for text art conversion.

Each catalog lists ``(glyph, pattern)`` pairs. Patterns are written in visual
order so that the binary literal reads like the block it describes: the most
significant bit is the upper left pixel and rows follow each other top to
bottom. Earlier entries win when two glyphs share a pattern.
"""

GLYPH_CATALOGS = {
    'slc': {
        'name': 'Symbols for Legacy Computing',
        'mask_dims': (3, 3),
        'mask_overlap': (0, 0),
        'glyphs': [
            (" ", 0b000_000_000),
            ("╋", 0b010_111_010),
            ("🬃", 0b000_110_000),
            ("🬃", 0b000_100_000),
            ("╹", 0b010_010_000),
            ("🬇", 0b000_011_000),
            ("🬇", 0b000_001_000),
            ("╻", 0b000_010_010),
            ("█", 0b111_111_111),
            ("▋", 0b110_110_110),
            ("▍", 0b100_100_100),
            ("🬀", 0b110_000_000),
            ("🬁", 0b011_000_000),
            ("🬂", 0b111_000_000),
            ("🬋", 0b000_111_000),
            ("🬎", 0b111_111_000),
            ("🬏", 0b000_000_110),
            ("🬞", 0b000_000_011),
            ("🬭", 0b000_000_111),
            ("🬰", 0b111_000_111),
            ("🬹", 0b000_111_111),
            ("🬼", 0b000_000_100),
            ("🬾", 0b000_100_100),
            ("🬿", 0b000_100_111),
            ("🬿", 0b000_110_111),
            ("🭀", 0b100_100_110),
            ("🭀", 0b100_110_110),
            ("🭁", 0b011_111_111),
            ("🭂", 0b001_111_111),
            ("🭄", 0b001_011_111),
            ("🭅", 0b011_011_111),
            ("🭆", 0b000_001_111),
            ("🭆", 0b000_011_111),
            ("🭇", 0b000_000_001),
            ("🭉", 0b000_001_001),
            ("🭌", 0b110_111_111),
            ("🭍", 0b100_111_111),
            ("🭎", 0b110_110_111),
            ("🭒", 0b111_111_011),
            ("🭕", 0b111_011_001),
            ("🭖", 0b111_011_011),
            ("🭗", 0b100_000_000),
            ("🭙", 0b100_100_000),
            ("🭜", 0b111_100_000),
            ("🭜", 0b111_110_000),
            ("🭝", 0b111_111_110),
            ("🭞", 0b111_111_100),
            ("🭠", 0b111_110_100),
            ("🭡", 0b111_110_110),
            ("🭢", 0b001_000_000),
            ("🭤", 0b001_001_000),
            ("🭧", 0b111_001_000),
            ("🭧", 0b111_011_000),
            ("🭨", 0b111_011_111),
            ("🭩", 0b101_111_111),
            ("🭪", 0b111_110_111),
            ("🭫", 0b111_111_101),
            ("🭬", 0b100_110_100),
            ("🭭", 0b111_010_000),
            ("🭮", 0b001_011_001),
            ("🭯", 0b000_010_111),
            ("🮚", 0b111_010_111),
            ("🮛", 0b101_111_101),
            ("🭲", 0b010_010_010),
            ("🮇", 0b001_001_001),
            ("🮉", 0b011_011_011),
        ],
    },
    # Marching square approximation using Symbols for Legacy Computing. The
    # outline only crosses a cell at the midpoints of its exterior edges, so
    # neighbouring glyphs connect seamlessly.
    'ms2x3': {
        'name': 'Marching Squares 2x3',
        'mask_dims': (2, 3),
        'mask_overlap': (1, 1),
        'glyphs': [
            (" ", 0b00_00_00),
            ("█", 0b11_11_11),
            ("🬂", 0b11_00_00),
            ("🬋", 0b00_11_00),
            ("🬎", 0b11_11_00),
            ("🬭", 0b00_00_11),
            ("🬰", 0b11_00_11),
            ("🬹", 0b00_11_11),
            # lower right
            ("🭁", 0b01_11_11),
            ("🭃", 0b01_01_11),
            ("🭆", 0b00_01_11),
            ("🭇", 0b00_00_01),
            ("🭉", 0b00_01_01),
            # lower left
            ("🬼", 0b00_00_10),
            ("🭌", 0b10_11_11),
            ("🭐", 0b10_10_11),
            ("🭑", 0b00_10_11),
            ("🬾", 0b00_10_10),
            # upper left
            ("🭗", 0b10_00_00),
            ("🭙", 0b10_10_00),
            ("🭜", 0b11_10_00),
            ("🭟", 0b11_10_10),
            ("🭝", 0b11_11_10),
            # upper right
            ("🭢", 0b01_00_00),
            ("🭤", 0b01_01_00),
            ("🭧", 0b11_01_00),
            ("🭔", 0b11_01_01),
            ("🭒", 0b11_11_01),
            # halves
            ("▌", 0b10_10_10),
            ("▐", 0b01_01_01),
            # last resort, introduces extra interior vertices
            ("🬀", 0b10_00_00),
            ("🬁", 0b01_00_00),
            ("🬂", 0b11_00_00),
            ("🬃", 0b00_10_00),
            ("🬄", 0b10_10_00),
            ("🬅", 0b01_10_00),
            ("🬆", 0b11_10_00),
            ("🬇", 0b00_01_00),
            ("🬈", 0b10_01_00),
            ("🬉", 0b01_01_00),
            ("🬊", 0b11_01_00),
            ("🬋", 0b00_11_00),
            ("🬌", 0b10_11_00),
            ("🬍", 0b01_11_00),
            ("🬎", 0b11_11_00),
            ("🬏", 0b00_00_10),
            ("🬐", 0b10_00_10),
            ("🬑", 0b01_00_10),
            ("🬒", 0b11_00_10),
            ("🬓", 0b00_10_10),
            ("▌", 0b10_10_10),
            ("🬔", 0b01_10_10),
            ("🬕", 0b11_10_10),
            ("🬖", 0b00_01_10),
            ("🬗", 0b10_01_10),
            ("🬘", 0b01_01_10),
            ("🬙", 0b11_01_10),
            ("🬚", 0b00_11_10),
            ("🬛", 0b10_11_10),
            ("🬜", 0b01_11_10),
            ("🬝", 0b11_11_10),
            ("🬞", 0b00_00_01),
            ("🬟", 0b10_00_01),
            ("🬠", 0b01_00_01),
            ("🬡", 0b11_00_01),
            ("🬢", 0b00_10_01),
            ("🬣", 0b10_10_01),
            ("🬤", 0b01_10_01),
            ("🬥", 0b11_10_01),
            ("🬦", 0b00_01_01),
            ("▐", 0b01_01_01),
            ("🬧", 0b10_01_01),
            ("🬨", 0b11_01_01),
            ("🬩", 0b00_11_01),
            ("🬪", 0b10_11_01),
            ("🬫", 0b01_11_01),
            ("🬬", 0b11_11_01),
            ("🬭", 0b00_00_11),
            ("🬮", 0b10_00_11),
            ("🬯", 0b01_00_11),
            ("🬰", 0b11_00_11),
            ("🬱", 0b00_10_11),
            ("🬲", 0b10_10_11),
            ("🬳", 0b01_10_11),
            ("🬴", 0b11_10_11),
            ("🬵", 0b00_01_11),
            ("🬶", 0b10_01_11),
            ("🬷", 0b01_01_11),
            ("🬸", 0b11_01_11),
            ("🬹", 0b00_11_11),
            ("🬺", 0b10_11_11),
            ("🬻", 0b01_11_11),
        ],
    },
    '1x1': {
        'name': 'Full Blocks 1x1',
        'mask_dims': (1, 1),
        'mask_overlap': (0, 0),
        'glyphs': [
            ("█", 0b1),
            (" ", 0b0),
        ],
    },
    '1x2': {
        'name': 'Half Blocks 1x2',
        'mask_dims': (1, 2),
        'mask_overlap': (0, 0),
        'glyphs': [
            ("█", 0b1_1),
            (" ", 0b0_0),
            ("🬎", 0b1_0),
            ("🬹", 0b0_1),
        ],
    },
    '2x2': {
        'name': 'Quadrants 2x2',
        'mask_dims': (2, 2),
        'mask_overlap': (0, 0),
        'glyphs': [
            ("█", 0b11_11),
            ("▖", 0b00_10),
            ("▗", 0b00_01),
            ("▘", 0b10_00),
            ("▙", 0b10_11),
            ("▚", 0b10_01),
            ("▛", 0b11_10),
            ("▜", 0b11_01),
            ("▝", 0b01_00),
            ("▞", 0b01_10),
            ("▟", 0b01_11),
            (" ", 0b00_00),
            ("🬎", 0b11_00),
            ("🬹", 0b00_11),
            ("▌", 0b10_10),
            ("▐", 0b01_01),
        ],
    },
    '2x3': {
        'name': 'Sextants 2x3',
        'mask_dims': (2, 3),
        'mask_overlap': (0, 0),
        'glyphs': [
            ("█", 0b11_11_11),
            (" ", 0b00_00_00),
            ("🬀", 0b10_00_00),
            ("🬁", 0b01_00_00),
            ("🬂", 0b11_00_00),
            ("🬃", 0b00_10_00),
            ("🬄", 0b10_10_00),
            ("🬅", 0b01_10_00),
            ("🬆", 0b11_10_00),
            ("🬇", 0b00_01_00),
            ("🬈", 0b10_01_00),
            ("🬉", 0b01_01_00),
            ("🬊", 0b11_01_00),
            ("🬋", 0b00_11_00),
            ("🬌", 0b10_11_00),
            ("🬍", 0b01_11_00),
            ("🬎", 0b11_11_00),
            ("🬏", 0b00_00_10),
            ("🬐", 0b10_00_10),
            ("🬑", 0b01_00_10),
            ("🬒", 0b11_00_10),
            ("🬓", 0b00_10_10),
            ("▌", 0b10_10_10),
            ("🬔", 0b01_10_10),
            ("🬕", 0b11_10_10),
            ("🬖", 0b00_01_10),
            ("🬗", 0b10_01_10),
            ("🬘", 0b01_01_10),
            ("🬙", 0b11_01_10),
            ("🬚", 0b00_11_10),
            ("🬛", 0b10_11_10),
            ("🬜", 0b01_11_10),
            ("🬝", 0b11_11_10),
            ("🬞", 0b00_00_01),
            ("🬟", 0b10_00_01),
            ("🬠", 0b01_00_01),
            ("🬡", 0b11_00_01),
            ("🬢", 0b00_10_01),
            ("🬣", 0b10_10_01),
            ("🬤", 0b01_10_01),
            ("🬥", 0b11_10_01),
            ("🬦", 0b00_01_01),
            ("▐", 0b01_01_01),
            ("🬧", 0b10_01_01),
            ("🬨", 0b11_01_01),
            ("🬩", 0b00_11_01),
            ("🬪", 0b10_11_01),
            ("🬫", 0b01_11_01),
            ("🬬", 0b11_11_01),
            ("🬭", 0b00_00_11),
            ("🬮", 0b10_00_11),
            ("🬯", 0b01_00_11),
            ("🬰", 0b11_00_11),
            ("🬱", 0b00_10_11),
            ("🬲", 0b10_10_11),
            ("🬳", 0b01_10_11),
            ("🬴", 0b11_10_11),
            ("🬵", 0b00_01_11),
            ("🬶", 0b10_01_11),
            ("🬷", 0b01_01_11),
            ("🬸", 0b11_01_11),
            ("🬹", 0b00_11_11),
            ("🬺", 0b10_11_11),
            ("🬻", 0b01_11_11),
        ],
    },
}

DEFAULT_GLYPH_SET = 'slc'
