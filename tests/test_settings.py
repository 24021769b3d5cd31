from prettier_ls.settings import DEFAULT_IGNORE_PATH, PrettierSettings


def test_defaults_for_empty_payload():
    settings = PrettierSettings.from_client(None)
    assert settings.prettier_path is None
    assert settings.ignore_path == DEFAULT_IGNORE_PATH
    assert settings.use_editor_config is True
    assert settings.with_node_modules is False
    assert settings.resolve_global_modules is False
    assert settings.require_config is False
    assert settings.formatting_options() == {}


def test_client_keys_are_mapped():
    settings = PrettierSettings.from_client(
        {
            "prettierPath": "./node_modules/prettier",
            "configPath": "",
            "ignorePath": ".gitignore",
            "requireConfig": True,
            "packageManager": "pnpm",
        }
    )
    assert settings.prettier_path == "./node_modules/prettier"
    assert settings.config_path is None
    assert settings.ignore_path == ".gitignore"
    assert settings.require_config is True
    assert settings.package_manager == "pnpm"


def test_only_known_formatting_options_are_forwarded():
    settings = PrettierSettings.from_client(
        {
            "tabWidth": 4,
            "useTabs": False,
            "trailingComma": None,
            "prettierPath": "./p",
            "enable": True,
        }
    )
    assert settings.formatting_options() == {"tabWidth": 4, "useTabs": False}


def test_sanitized_copy_keeps_formatting_options():
    settings = PrettierSettings.from_client({"configPath": "./.prettierrc", "semi": False, "requireConfig": True})
    safe = settings.sanitized()
    assert safe.config_path is None
    assert safe.require_config is True
    assert safe.formatting_options() == {"semi": False}
    # The original is untouched.
    assert settings.config_path == "./.prettierrc"
