import pytest

import app as brew_app
from models import FermentableAddition, HopAddition, Recipe


@pytest.fixture
def pale_ale():
    recipe = Recipe(20, 27, 0.72, 0.75)
    recipe.add_fermentable(FermentableAddition('Pale', 4.5, 37))
    recipe.add_hop(HopAddition('Cascade', 25, 0.06, 60))
    return recipe


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(brew_app, 'CONFIG_FILE', str(tmp_path / 'config.json'))
    monkeypatch.setattr(brew_app, 'DEFAULT_STORE_FILE', str(tmp_path / 'brew_store.json'))
    brew_app.app.config['TESTING'] = True
    with brew_app.app.test_client() as client:
        yield client
