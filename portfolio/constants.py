# CV page geometry, in millimetres (A4 portrait)
A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297
PT_PER_MM = 72 / 25.4

CV_MARGIN_MM = 20
CV_TOP_MM = 20
CV_BULLET_INDENT_MM = 5
CV_LINE_HEIGHT_MM = 5

# Empirical page-break thresholds tied to the font sizes below.
# Recompute if the page size or fonts change.
CV_SECTION_BREAK_MM = 240
CV_PROJECT_BREAK_MM = 230
CV_EDUCATION_BREAK_MM = 250

CV_FILENAME_SUFFIX = "_CV.pdf"
CV_BULLET = "•"
CV_SEPARATOR = " • "

# Font Awesome classes for skill cards
ICON_DEFAULT = "fa-code"
ICON_FRAMEWORK = "fa-layer-group"
ICON_TOOL = "fa-screwdriver-wrench"

REVEAL_STEP_MS = 100

NOT_LOADED_NOTICE = "Data is loading... please wait a moment."
