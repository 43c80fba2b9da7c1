import numbers

from units import kg_to_lb

def _number(value):
    return isinstance(value, numbers.Real) and value == value

class NotComputable:
    # Single falsy instance, NOT_COMPUTABLE; arithmetic with it raises TypeError
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'NOT_COMPUTABLE'

NOT_COMPUTABLE = NotComputable()

def is_computable(value):
    return value is not NOT_COMPUTABLE

class FermentableAddition:
    def __init__(self, name, mass_kg, ppg):
        self.name = name
        self.mass_kg = mass_kg
        self.ppg = ppg

    def is_valid(self):
        return _number(self.mass_kg) and _number(self.ppg) and self.mass_kg > 0 and self.ppg > 0

    def extract_points(self):
        # PPG x lb, before efficiency and volume
        return self.ppg * kg_to_lb(self.mass_kg)

    def to_dict(self):
        return {
            'name': self.name,
            'mass_kg': self.mass_kg,
            'ppg': self.ppg
        }

    @staticmethod
    def from_dict(data):
        return FermentableAddition(
            data.get('name', ''),
            data['mass_kg'],
            data['ppg']
        )

class HopAddition:
    def __init__(self, name, mass_g, alpha, time):
        self.name = name
        self.mass_g = mass_g
        self.alpha = alpha
        self.time = time

    def is_valid(self):
        if not (_number(self.mass_g) and _number(self.alpha) and _number(self.time)):
            return False
        return self.mass_g > 0 and self.alpha > 0 and self.time >= 0

    def ibu_contribution(self, final_volume_l, utilization):
        return (self.alpha * self.mass_g * 1000 * utilization) / (final_volume_l * 10)

    def to_dict(self):
        return {
            'name': self.name,
            'mass_g': self.mass_g,
            'alpha': self.alpha,
            'time': self.time
        }

    @staticmethod
    def from_dict(data):
        return HopAddition(
            data.get('name', ''),
            data['mass_g'],
            data['alpha'],
            data['time']
        )

class Recipe:
    # Liters and (0, 1] fractions; preboil_volume None or 0 means not tracked
    def __init__(self, final_volume, preboil_volume, efficiency, attenuation):
        self.final_volume = final_volume
        self.preboil_volume = preboil_volume
        self.efficiency = efficiency
        self.attenuation = attenuation
        self.fermentables = []
        self.hops = []

    def add_fermentable(self, fermentable):
        self.fermentables.append(fermentable)

    def add_hop(self, hop):
        self.hops.append(hop)

    def to_dict(self):
        return {
            'final_volume': self.final_volume,
            'preboil_volume': self.preboil_volume,
            'efficiency': self.efficiency,
            'attenuation': self.attenuation,
            'fermentables': [f.to_dict() for f in self.fermentables],
            'hops': [h.to_dict() for h in self.hops]
        }

    @staticmethod
    def from_dict(data):
        recipe = Recipe(
            data.get('final_volume'),
            data.get('preboil_volume'),
            data.get('efficiency'),
            data.get('attenuation')
        )
        recipe.fermentables = [FermentableAddition.from_dict(f) for f in data.get('fermentables') or []]
        recipe.hops = [HopAddition.from_dict(h) for h in data.get('hops') or []]
        return recipe

class RecipeMetrics:
    FIELDS = ('og', 'boil_gravity', 'ibu', 'fg', 'abv')

    def __init__(self, og, boil_gravity, ibu, fg, abv):
        self.og = og
        self.boil_gravity = boil_gravity
        self.ibu = ibu
        self.fg = fg
        self.abv = abv

    def to_dict(self):
        # NOT_COMPUTABLE -> null
        result = {}
        for field in self.FIELDS:
            value = getattr(self, field)
            result[field] = value if is_computable(value) else None
        return result

    def __eq__(self, other):
        if not isinstance(other, RecipeMetrics):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self.FIELDS)

    def __repr__(self):
        values = ', '.join(f'{f}={getattr(self, f)!r}' for f in self.FIELDS)
        return f'RecipeMetrics({values})'
