"""Plural selection example for dotl10n.

French treats 0 as singular while English does not. Language identifiers
are matched exactly, so regional identifiers such as fr-CA get a rule through
a custom PluralSelector table.
"""

from dotl10n import PluralSelector, TranslationEngine, select_form
from dotl10n.runtime.plural_rules import BUILTIN_RULES, zero_or_one_is_singular

english = {
    "messages": {
        "notification": {
            "singular": "You have {{}} new message",
            "plural": "You have {{}} new messages",
        },
        "from": {
            "singular": "{{}} message from {{sender}}",
            "plural": "{{}} messages from {{sender}}",
        },
    }
}

french = {
    "messages": {
        "notification": {
            "singular": "Vous avez {{}} nouveau message",
            "plural": "Vous avez {{}} nouveaux messages",
        }
    }
}

# Example 1: English
print("=" * 50)
print("Example 1: English")
print("=" * 50)

engine = TranslationEngine("en", english)
for count in (0, 1, 5):
    print(engine.ln_plural("messages.notification", count))
# Output:
# You have 0 new messages
# You have 1 new message
# You have 5 new messages

print(engine.ln_plural("messages.from", 3, {"sender": "Bob"}))
# Output: 3 messages from Bob

# Example 2: French
print("\n" + "=" * 50)
print("Example 2: French (0 is singular)")
print("=" * 50)

engine = TranslationEngine("fr", french)
for count in (0, 1, 2):
    print(engine.ln_plural("messages.notification", count))
# Output:
# Vous avez 0 nouveau message
# Vous avez 1 nouveau message
# Vous avez 2 nouveaux messages

# Example 3: Custom rules
print("\n" + "=" * 50)
print("Example 3: Custom Rules")
print("=" * 50)

print(select_form("fr-CA", 0))
# Output: plural (fr-CA is not in the built-in table)

selector = PluralSelector({**BUILTIN_RULES, "fr-CA": zero_or_one_is_singular})
engine = TranslationEngine("fr-CA", french, selector=selector)
print(engine.ln_plural("messages.notification", 0))
# Output: Vous avez 0 nouveau message
