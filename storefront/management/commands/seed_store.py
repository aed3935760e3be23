from decimal import Decimal
from django.core.management.base import BaseCommand
from storefront.models import Category, OrderItem, Order, Product


CATEGORIES = [
    "زيوت الوجه",
    "كريمات الترطيب",
    "مقشرات طبيعية",
    "أقنعة العناية",
    "سيرامات وأمصال",
]

SERUM_IMAGE = "https://images.unsplash.com/photo-1556228578-8c89e6adf883?w=500&h=500&fit=crop"
SCRUB_IMAGE = "https://images.unsplash.com/photo-1596462502278-af7c619b3fbb?w=500&h=500&fit=crop"

# (name, description, price, category, image)
PRODUCTS = [
    ("زيت الورد والزيتون", "زيت طبيعي معالج بالأوزون لترطيب وتغذية البشرة", '299', "زيوت الوجه", SERUM_IMAGE),
    ("كريم الأرغان المرطب", "كريم غني بزيت الأرغان الطبيعي للبشرة الجافة", '349', "كريمات الترطيب", SERUM_IMAGE),
    ("كريم اللافندر والحليب", "مرطب فاخر برائحة اللافندر الطبيعية", '329', "كريمات الترطيب", SERUM_IMAGE),
    ("مقشر القهوة الطبيعي", "مقشر لطيف بدقائق القهوة الطبيعية لإزالة الجلد الميت", '249', "مقشرات طبيعية", SCRUB_IMAGE),
    ("مقشر الشوفان والعسل", "مقشر ناعم مع الشوفان والعسل الطبيعي", '269', "مقشرات طبيعية", SCRUB_IMAGE),
    ("قناع الطين الأسود", "قناع تنقية عميقة بالطين الأسود والفحم النشط", '279', "أقنعة العناية", SCRUB_IMAGE),
    ("قناع الزعفران والعسل", "قناع مرطب فاخر بالزعفران والعسل الطبيعي", '349', "أقنعة العناية", SCRUB_IMAGE),
    ("سيرم الشاي الأخضر", "أمصال مركز بالشاي الأخضر لتنعيم وتفتيح البشرة", '399', "سيرامات وأمصال", SERUM_IMAGE),
    ("سيرم فيتامين سي", "أمصال قوية بفيتامين سي لتعزيز الإضاءة والحيوية", '449', "سيرامات وأمصال", SERUM_IMAGE),
    ("سيرم الروز هيب", "أمصال طبيعي من زيت الروز هيب لتجديد البشرة", '379', "سيرامات وأمصال", SERUM_IMAGE),
    ("زيت جوز الهند العضوي", "زيت جوز الهند الطبيعي النقي للعناية الشاملة", '279', "زيوت الوجه", SERUM_IMAGE),
    ("زيت الجزر والطماطم", "زيت مغذي بمستخلصات الجزر والطماطم الطبيعية", '319', "زيوت الوجه", SERUM_IMAGE),
]


class Command(BaseCommand):
    help = 'Seed the storefront with sample categories and products'

    def add_arguments(self, parser):
        parser.add_argument('--clear', action='store_true', help='Clear existing catalogue and orders first')

    def handle(self, *args, **options):
        if options['clear']:
            OrderItem.objects.all().delete()
            Order.objects.all().delete()
            Product.objects.all().delete()
            Category.objects.all().delete()
            self.stdout.write(self.style.WARNING('Cleared existing data.'))

        categories = {}
        for name in CATEGORIES:
            category, _ = Category.objects.get_or_create(name=name)
            categories[name] = category
        self.stdout.write(f'Categories ready: {len(categories)}')

        created = 0
        for name, description, price, category_name, image_url in PRODUCTS:
            _, was_created = Product.objects.get_or_create(
                name=name,
                defaults={
                    'description': description,
                    'price': Decimal(price),
                    'base_price': Decimal(price),
                    'category': categories[category_name],
                    'image_url': image_url,
                }
            )
            created += was_created

        self.stdout.write(self.style.SUCCESS(
            f'Products ready: {len(PRODUCTS)} ({created} new) in {len(categories)} categories.'
        ))
