"""
Constants and configuration values for the element description workflow.
"""

# Padding (in logical pixels) kept around the element on every side of the crop
MINIMUM_BUFFER = 100

# Screenshots whose width differs from the window width by more than this
# ratio are treated as captured on a high density display
DPI_TOLERANCE = 0.05
DPI_EPSILON = 1e-9

# JPEG settings for the cropped element image
CROP_IMAGE_FORMAT = 'JPEG'
CROP_IMAGE_QUALITY = 90
CROP_IMAGE_MIME = 'image/jpeg'

# OCR compaction
MAX_LINES_OCR = 10
OCR_API_KEY_HEADER = 'Ocp-Apim-Subscription-Key'

# Shrink-and-retry policy for completions
MIN_SEED_FLOOR = 3
MIN_TEXT_FLOOR = 2000
TEXT_SHRINK_FACTOR = 0.8

# Seeds used when the caller does not pick any
DEFAULT_SEED_IDS = tuple(range(1, 11))

# Prompt layout
PROMPT_PREAMBLE = 'Summarize meaning from HTML and OCR data.'
PROMPT_SEPARATOR = '\n###\n'

SUMMARY_PREAMBLE = (
    'Given a website title and some text from the website, '
    'provide a one sentence summary\n\n'
)

# Completion parameters
INFERENCE_PARAMS = {
    'max_tokens': 128,
    'temperature': 0.0,
    'stop': ['\n'],
}

SUMMARY_PARAMS = {
    'max_tokens': 128,
    'temperature': 0.0,
    'stop': ['"""'],
}

# data:<mime>;base64,<payload>
DATA_URI_PATTERN = r'^data:(?P<type>[\w/+.-]+)?;base64,(?P<data>.+)$'
