from django.db import migrations

CATEGORIES = [
    ("Tajweed", "tajweed", "Rules for the correct pronunciation of the Quran."),
    ("Tafsir", "tafsir", "Exegesis or interpretation of the Quran."),
    ("Hifz", "hifz", "Memorization of the Holy Quran."),
]


def seed_categories(apps, schema_editor):
    Category = apps.get_model("academy", "Category")
    if Category.objects.exists():
        return
    for name, slug, description in CATEGORIES:
        Category.objects.create(name=name, slug=slug, description=description)


def unseed_categories(apps, schema_editor):
    Category = apps.get_model("academy", "Category")
    Category.objects.filter(slug__in=[slug for _, slug, _ in CATEGORIES], lessons__isnull=True).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("academy", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_categories, unseed_categories),
    ]
