"""Seed rows written at bootstrap."""

DEFAULT_FACTS = [
    ("personal", "name", "John Doe"),
    ("personal", "email", "john@example.com"),
    ("preferences", "theme", "dark"),
    ("preferences", "language", "english"),
]

# {data} and {query} are shown verbatim; nothing substitutes them.
DEFAULT_PATTERNS = [
    ("hello", "Hi there! I'm your chatbot assistant. How can I help you today?"),
    (
        "help",
        "I can assist you with general questions, provide information, or just chat. "
        "What would you like to know?",
    ),
    ("bye", "Goodbye! Have a great day! Feel free to come back if you need anything."),
    ("show data", "Here's the data you requested: {data}"),
    ("search", "I'll help you search for: {query}"),
]
