"""Quickstart example for dotl10n.

Demonstrates dot-path lookups, indexed and named placeholders, default text
and the fallbacks for missing keys, all against an in-memory document.
"""

from dotl10n import TranslationEngine

document = {
    "app": {"title": "My App", "version": 2},
    "greetings": {
        "hello": "Hello {{}}!",
        "welcome": "Welcome back, {{firstName}} {{lastName}}",
    },
    "orders": {"summary": "Order {{}} for {{customerName}} - Total: ${{total}}"},
}

engine = TranslationEngine("en", document)

# Example 1: Nested keys
print("=" * 50)
print("Example 1: Nested Keys")
print("=" * 50)

print(engine.ln("app.title"))
# Output: My App

print(engine.ln("app.version"))
# Output: 2 (non-string values are returned as-is)

# Example 2: Placeholders
print("\n" + "=" * 50)
print("Example 2: Placeholders")
print("=" * 50)

print(engine.ln("greetings.hello", "John"))
# Output: Hello John!

print(engine.ln("greetings.welcome", {"firstName": "John", "lastName": "Doe"}))
# Output: Welcome back, John Doe

print(engine.ln("orders.summary", "#12345", {"customerName": "Alice", "total": 99.99}))
# Output: Order #12345 for Alice - Total: $99.99

# Example 3: Fallbacks
print("\n" + "=" * 50)
print("Example 3: Fallbacks")
print("=" * 50)

print(engine.ln("greetings.missing"))
# Output: greetings.missing

print(engine.ln("greetings.missing", {"defaultTxt": "Hi there"}))
# Output: Hi there

print(repr(engine.ln("")))
# Output: 'unknown'

print("\n" + "=" * 50)
print("[SUCCESS] All examples completed successfully!")
print("=" * 50)
