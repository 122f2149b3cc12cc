from faker import Faker
from faker.providers import BaseProvider

from tulipa.models.order import VARIETIES


class TulipProvider(BaseProvider):
    """
    Demo data for the order console
    """

    bouquet_sizes = [5, 7, 9, 11, 15, 21, 25, 35, 51]

    def tulip_variety(self):
        return self.random_element(VARIETIES)

    def bouquet_size(self):
        return self.random_element(self.bouquet_sizes)

    def bouquet_price(self, quantity):
        """Rough retail price: per-stem price plus packaging margin"""
        per_stem = self.random_element([1.2, 1.5, 1.8, 2.1])
        return round(quantity * per_stem + self.random_int(0, 5), 2)

# Faker with the custom provider attached
fake = Faker()
fake.add_provider(TulipProvider)
