"""
Static product catalog.

This is the single canonical catalog definition: prices, color lists and
sizes here are what the storefront shows and what the manifest build
checks images against.
"""

from typing import Optional, Tuple

from models.product import Product, SizeChart


ADULT_COLORS = (
    "Bianco",
    "Blu-Navy",
    "Bordeaux",
    "Celeste",
    "Cream",
    "Grigio-Oxford",
    "Havana",
    "Nero",
    "Rosa-Petalo",
    "Verde-Bosco",
)

PRODUCTS: Tuple[Product, ...] = (
    Product(
        name="Felpa KANGAROO (Adulto)",
        model_key="KANGAROO",
        variant="adult",
        price=25,
        description="Felpa con cappuccio, tasca a marsupio e interno felpato.",
        details=(
            "Cotone/poliestere 280 g/m²",
            "Cappuccio foderato con coulisse",
            "Logo della scuola ricamato sul petto",
        ),
        colors=ADULT_COLORS[:7] + ("Lilla",) + ADULT_COLORS[7:],
        sizes=("S", "M", "L", "XL"),
    ),
    Product(
        name="Felpa KANGAROO (Bambino)",
        model_key="KANGAROO",
        variant="kids",
        price=22,
        description="Versione bambino della felpa KANGAROO, tagliata su misura.",
        details=(
            "Taglie per età 4-14 anni",
            "Polsini e fondo a costine",
        ),
        colors=("Bianco", "Blu", "Grigio", "Nero"),
        sizes=("XS", "S", "M", "L"),
    ),
    Product(
        name="Maglietta WHALE (Adulto)",
        model_key="WHALE",
        variant="adult",
        price=15,
        description="T-shirt leggera, cotone 100%, taglio unisex.",
        details=(
            "Cotone pettinato 150 g/m²",
            "Stampa serigrafica fronte",
        ),
        colors=ADULT_COLORS,
        sizes=("S", "M", "L", "XL"),
    ),
    Product(
        name="Maglietta WHALE (Bambino)",
        model_key="WHALE",
        variant="kids",
        price=13,
        description="T-shirt per bambini, morbida e resistente ai lavaggi.",
        details=(
            "Cotone 100%",
            "Lavabile in lavatrice a 40°",
        ),
        colors=ADULT_COLORS,
        sizes=("XS", "S", "M", "L"),
    ),
    Product(
        name="Borraccia VOLCANO",
        model_key="VOLCANO",
        variant="standard",
        price=12,
        description="Borraccia termica con tappo a vite e logo inciso.",
        details=(
            "Acciaio inox a doppia parete, 500 ml",
            "Mantiene la temperatura fino a 12 ore",
        ),
        colors=("Standard",),
    ),
    Product(
        name="Cappellino TENERIFE",
        model_key="TENERIFE",
        variant="standard",
        price=10,
        description="Cappellino con visiera curva e chiusura regolabile.",
        details=(
            "Cotone twill",
            "Logo ricamato frontale",
        ),
        colors=("Blu-Navy", "Nero", "Bianco"),
    ),
)

SIZE_GUIDE: Tuple[SizeChart, ...] = (
    SizeChart(
        title="Felpe bambino (misure in cm)",
        rows=(
            "4/6 anni: torace 36,7  lunghezza 45,9  manica 40,65",
            "6/8 anni: torace 38,4  lunghezza 50,7  manica 44,85",
            "8/10 anni: torace 41,0  lunghezza 55,5  manica 49,25",
            "10/12 anni: torace 44,5  lunghezza 60,3  manica 53,85",
            "12/14 anni: torace 48,0  lunghezza 65,1  manica 58,45",
        ),
    ),
    SizeChart(
        title="Taglie bambino per età",
        rows=(
            "XXS: 2-4 anni • ~98-110 cm (felpe disponibili solo in blu navy)",
            "XS: 5-6 anni • ~110-118 cm",
            "S: 7-8 anni • ~119-128 cm",
            "M: 9-10 anni • ~129-140 cm",
            "L: 11-12 anni • ~141-152 cm",
        ),
    ),
)


def get_products() -> Tuple[Product, ...]:
    return PRODUCTS


def find_product(model_key: str, variant: str) -> Optional[Product]:
    """Look up a product by model key and variant."""
    for product in PRODUCTS:
        if product.model_key == model_key and product.variant == variant:
            return product
    return None
