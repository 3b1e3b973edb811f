import factory
from factory.faker import faker

from aml_search.models import FieldFilter, FieldType, ObjectFilter, PropertyType, TextFilter

fake = faker.Faker()


class TextFilterFactory(factory.Factory):
    """Free-text filter with a few random words."""

    class Meta:
        model = TextFilter

    search_text = factory.LazyFunction(lambda: " ".join(fake.words(nb=fake.random_int(1, 3))))


class FieldFilterFactory(factory.Factory):
    class Meta:
        model = FieldFilter

    field_type = FieldType.OWNER.value
    field_name = factory.LazyFunction(fake.user_name)


class ObjectFilterFactory(factory.Factory):
    """
    Object filter as produced by `type:<value>`.

    object_name is empty by default, matching what the parser builds.
    """

    class Meta:
        model = ObjectFilter

    object_type = PropertyType.DIMENSION.value
    object_name = ""
