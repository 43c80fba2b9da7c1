from flask import Flask, request, jsonify
import json
import math
import os

from calculations import calculate
from models import FermentableAddition, HopAddition, Recipe, is_computable

app = Flask(__name__)

CONFIG_FILE = 'config.json'
DEFAULT_STORE_FILE = 'brew_store.json'
STORE_KEY = 'brew_quick_last_recipe'
PLACEHOLDER = '—'

DEFAULT_FORM = {
    'final_volume': 20,
    'preboil_volume': 27,
    'efficiency': 72,
    'attenuation': 75,
    'fermentables': [{'name': 'Pale', 'kg': 4.5, 'ppg': 37}],
    'hops': [{'name': 'Cascade', 'g': 25, 'aa': 6, 'time': 60}]
}

# Blank rows for the "add fermentable" / "add hop" buttons
NEW_FERMENTABLE_ROW = {'name': '', 'kg': 0, 'ppg': 37}
NEW_HOP_ROW = {'name': '', 'g': 0, 'aa': 12, 'time': 60}

def load_config():
    if os.path.exists(CONFIG_FILE):
        with open(CONFIG_FILE, 'r') as f:
            return json.load(f)
    return {}

def save_config(config):
    with open(CONFIG_FILE, 'w') as f:
        json.dump(config, f, indent=2)

def get_store_file():
    config = load_config()
    return config.get('store_file') or DEFAULT_STORE_FILE

def load_store():
    store_file = get_store_file()
    if os.path.exists(store_file):
        with open(store_file, 'r') as f:
            return json.load(f)
    return {}

def save_store(store):
    with open(get_store_file(), 'w') as f:
        json.dump(store, f, indent=2)

def store_get(key):
    return load_store().get(key)

def store_set(key, value):
    store = load_store()
    store[key] = value
    save_store(store)

def read_number(value):
    if value is None or value == '':
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number

def read_rows(form, key):
    rows = form.get(key) or []
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise ValueError(f'{key} must be a list of objects')
    return rows

def read_percent(value):
    number = read_number(value)
    return None if number is None else number / 100

def recipe_from_form(form):
    # Percentages in; rows that can't contribute never reach the calculations
    if not isinstance(form, dict):
        raise ValueError('Expected a JSON object')

    recipe = Recipe(
        read_number(form.get('final_volume')),
        read_number(form.get('preboil_volume')),
        read_percent(form.get('efficiency')),
        read_percent(form.get('attenuation'))
    )

    for row in read_rows(form, 'fermentables'):
        fermentable = FermentableAddition(
            str(row.get('name') or '').strip(),
            read_number(row.get('kg')) or 0,
            read_number(row.get('ppg')) or 0
        )
        if fermentable.is_valid():
            recipe.add_fermentable(fermentable)

    for row in read_rows(form, 'hops'):
        hop = HopAddition(
            str(row.get('name') or '').strip(),
            read_number(row.get('g')) or 0,
            read_percent(row.get('aa')) or 0,
            read_number(row.get('time')) or 0
        )
        if hop.is_valid():
            recipe.add_hop(hop)

    return recipe

def recipe_to_form(recipe):
    preboil = recipe.preboil_volume
    return {
        'final_volume': recipe.final_volume,
        'preboil_volume': preboil if preboil is not None and math.isfinite(preboil) else '',
        'efficiency': recipe.efficiency * 100,
        'attenuation': recipe.attenuation * 100,
        'fermentables': [{'name': f.name, 'kg': f.mass_kg, 'ppg': f.ppg} for f in recipe.fermentables],
        'hops': [{'name': h.name, 'g': h.mass_g, 'aa': h.alpha * 100, 'time': h.time} for h in recipe.hops]
    }

def default_recipe():
    return recipe_from_form(DEFAULT_FORM)

def or_default(value, default):
    return default if value is None else value

def fill_defaults(recipe):
    # Unset numbers and empty ingredient lists come from the default recipe
    defaults = default_recipe()
    recipe.final_volume = or_default(read_number(recipe.final_volume), defaults.final_volume)
    recipe.preboil_volume = read_number(recipe.preboil_volume)
    recipe.efficiency = or_default(read_number(recipe.efficiency), defaults.efficiency)
    recipe.attenuation = or_default(read_number(recipe.attenuation), defaults.attenuation)
    recipe.fermentables = [f for f in recipe.fermentables if f.is_valid()] or defaults.fermentables
    recipe.hops = [h for h in recipe.hops if h.is_valid()] or defaults.hops
    return recipe

def save_last_recipe(recipe):
    store_set(STORE_KEY, json.dumps(recipe.to_dict()))
    app.logger.info('Saved recipe with %d fermentables and %d hops',
                    len(recipe.fermentables), len(recipe.hops))

def load_last_recipe():
    raw = store_get(STORE_KEY)
    if not raw:
        return None
    try:
        recipe = Recipe.from_dict(json.loads(raw))
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        app.logger.warning('Ignoring unreadable stored recipe: %s', e)
        return None
    app.logger.info('Loaded stored recipe with %d fermentables and %d hops',
                    len(recipe.fermentables), len(recipe.hops))
    return recipe

def format_value(value, digits, suffix=''):
    if not is_computable(value):
        return PLACEHOLDER
    return f'{value:.{digits}f}{suffix}'

def format_metrics(metrics):
    return {
        'og': format_value(metrics.og, 3),
        'boil_gravity': format_value(metrics.boil_gravity, 3),
        'ibu': format_value(metrics.ibu, 1),
        'fg': format_value(metrics.fg, 3),
        'abv': format_value(metrics.abv, 1, ' %')
    }

def metrics_payload(recipe):
    metrics = calculate(recipe)
    return {
        'recipe': recipe.to_dict(),
        'metrics': metrics.to_dict(),
        'display': format_metrics(metrics)
    }

def read_form():
    form = request.get_json(silent=True)
    if form is None:
        raise ValueError('Expected a JSON body')
    return recipe_from_form(form)

def valid_store_file(store_file):
    if not store_file or not isinstance(store_file, str) or os.path.isdir(store_file):
        return False
    return os.path.isdir(os.path.dirname(os.path.abspath(store_file)))

@app.route('/api/config', methods=['GET', 'POST'])
def handle_config():
    if request.method == 'POST':
        data = request.get_json(silent=True)
        store_file = data.get('store_file', '') if isinstance(data, dict) else ''

        if valid_store_file(store_file):
            config = load_config()
            config['store_file'] = store_file
            save_config(config)
            return jsonify({'success': True, 'store_file': store_file})
        else:
            return jsonify({'success': False, 'error': 'Invalid store file'}), 400
    else:
        return jsonify({'store_file': get_store_file()})

@app.route('/api/recipe/defaults')
def get_defaults():
    return jsonify({
        'form': DEFAULT_FORM,
        'fermentable_row': NEW_FERMENTABLE_ROW,
        'hop_row': NEW_HOP_ROW
    })

@app.route('/api/recipe/calculate', methods=['POST'])
def calculate_recipe():
    try:
        recipe = read_form()
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(metrics_payload(recipe))

@app.route('/api/recipe', methods=['GET', 'POST'])
def handle_recipe():
    if request.method == 'POST':
        try:
            recipe = read_form()
        except ValueError as e:
            return jsonify({'error': str(e)}), 400
        save_last_recipe(recipe)
        return jsonify({'success': True, 'recipe': recipe.to_dict()})

    recipe = load_last_recipe()
    stored = recipe is not None
    if stored:
        recipe = fill_defaults(recipe)
    else:
        recipe = default_recipe()
    payload = metrics_payload(recipe)
    payload.update({'stored': stored, 'form': recipe_to_form(recipe)})
    return jsonify(payload)

if __name__ == '__main__':
    app.run(debug=True)
