"""Loading and live reloading example for dotl10n.

Writes a small locales directory, loads two resource files per language,
switches languages, and picks up an edited file through reload polling.
"""

import json
import logging
import tempfile
import time
from pathlib import Path

from dotl10n import Localization, LocalizationConfig

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

FILES = {
    "en": {
        "common.json": {"buttons": {"save": "Save", "cancel": "Cancel"}},
        "app.json": {"app": {"title": "My App"}, "greetings": {"hello": "Hello {{}}!"}},
    },
    "fr": {
        "common.json": {"buttons": {"save": "Enregistrer", "cancel": "Annuler"}},
        "app.json": {"app": {"title": "Mon App"}, "greetings": {"hello": "Bonjour {{}} !"}},
    },
}

with tempfile.TemporaryDirectory() as tmpdir:
    base = Path(tmpdir)
    for language, files in FILES.items():
        (base / language).mkdir()
        for name, document in files.items():
            (base / language / name).write_text(json.dumps(document), encoding="utf-8")

    config = LocalizationConfig(
        language="en",
        base_location=tmpdir,
        managed_languages=["en", "fr"],
        resource_files=["common.json", "app.json"],
        enable_reload=True,
        reload_interval=0.2,
    )

    with Localization(config) as l10n:
        print(l10n.ln("buttons.save"), "/", l10n.ln("greetings.hello", "Ann"))
        # Output: Save / Hello Ann!

        summary = l10n.set_language("fr")
        print(summary)
        print(l10n.ln("buttons.save"), "/", l10n.ln("greetings.hello", "Ann"))
        # Output: Enregistrer / Bonjour Ann !

        l10n.set_language("de")
        print(l10n.ln("app.title"))
        # Output: Mon App (de is not managed; the French document stays active)

        l10n.set_language("en")
        l10n.check_for_updates()  # record current file stamps
        edited = base / "en" / "app.json"
        edited.write_text(
            json.dumps({"app": {"title": "My Edited App"}, "greetings": {"hello": "Hi {{}}"}}),
            encoding="utf-8",
        )
        deadline = time.monotonic() + 5
        while l10n.ln("app.title") != "My Edited App" and time.monotonic() < deadline:
            time.sleep(0.1)
        print(l10n.ln("app.title"))
        # Output: My Edited App
