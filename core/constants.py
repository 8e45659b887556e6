from pathlib import Path

ROOT = Path(__file__).parent.parent

# Worker queue
SUBMIT_MESSAGE = "Request queued for processing"
CLEAR_MESSAGE = "All requests cleared"
NOT_FOUND_MESSAGE = "Request not found"
PROCESSING_FAILED_MESSAGE = "Processing failed"
ERROR_RESULT_PREFIX = "Error: "
INTERNAL_ERROR_MESSAGE = "Internal server error"

# Client reconciler
SUBMIT_BATCH_FAILED_MESSAGE = "Failed to submit requests. Please try again."
CLEAR_BATCH_FAILED_MESSAGE = "Failed to clear requests."

# Text streaming
STREAM_ERROR_MESSAGE = "Error: Failed to stream text content"

# Mock data
TOP_FILTERS_LIMIT = 20
MIN_AGE = 18
MAX_AGE = 99
MAX_HOBBIES = 10

NATIONALITIES: tuple[str, ...] = (
    "American",
    "British",
    "Canadian",
    "Australian",
    "German",
    "French",
    "Italian",
    "Spanish",
    "Japanese",
    "Chinese",
    "Korean",
    "Indian",
    "Brazilian",
    "Mexican",
    "Russian",
    "Swedish",
    "Dutch",
    "Swiss",
    "Norwegian",
    "Danish",
    "Finnish",
    "Polish",
    "Czech",
    "Hungarian",
    "Romanian",
    "Bulgarian",
    "Greek",
    "Turkish",
    "Portuguese",
    "Irish",
    "Scottish",
    "Welsh",
    "New Zealander",
    "South African",
)

HOBBIES: tuple[str, ...] = (
    "Reading",
    "Writing",
    "Photography",
    "Cooking",
    "Baking",
    "Gardening",
    "Painting",
    "Drawing",
    "Sculpting",
    "Knitting",
    "Crocheting",
    "Sewing",
    "Woodworking",
    "Metalworking",
    "Pottery",
    "Jewelry Making",
    "Calligraphy",
    "Origami",
    "Paper Crafting",
    "Scrapbooking",
    "Collecting",
    "Gaming",
    "Puzzle Solving",
    "Chess",
    "Board Games",
    "Card Games",
    "Magic Tricks",
    "Juggling",
    "Dancing",
    "Singing",
    "Playing Music",
    "Composing Music",
    "Acting",
    "Stand-up Comedy",
    "Poetry",
    "Blogging",
    "Vlogging",
    "Podcasting",
    "Streaming",
    "Coding",
    "Web Design",
    "Graphic Design",
    "Animation",
    "Video Editing",
    "Sound Design",
    "Film Making",
    "Astronomy",
    "Bird Watching",
    "Hiking",
    "Camping",
    "Fishing",
    "Hunting",
    "Rock Climbing",
    "Mountain Biking",
    "Cycling",
    "Running",
    "Swimming",
    "Yoga",
    "Meditation",
    "Martial Arts",
    "Boxing",
    "Wrestling",
    "Tennis",
    "Golf",
    "Basketball",
    "Soccer",
    "Baseball",
    "Volleyball",
    "Badminton",
    "Table Tennis",
    "Bowling",
    "Skating",
    "Skiing",
    "Snowboarding",
    "Surfing",
    "Scuba Diving",
    "Sailing",
    "Kayaking",
    "Canoeing",
    "Rafting",
    "Paragliding",
    "Skydiving",
    "Bungee Jumping",
    "Caving",
    "Geocaching",
    "Urban Exploration",
)
