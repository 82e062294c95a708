"""Constants for vendor order sheet ingestion."""

# Canonical line item fields, in enumeration order. Mapping ties resolve
# to the field listed first.
CANONICAL_FIELDS: tuple[str, ...] = (
    "sku",
    "vendor_sku",
    "product_name",
    "variant_title",
    "size",
    "color",
    "material",
    "qty",
    "unit_cost",
    "unit_retail",
    "barcode",
    "weight",
    "hs_code",
    "country_of_origin",
)

# Known vendor header spellings per canonical field
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "sku": (
        "sku", "our sku", "internal sku", "item sku", "product sku",
        "style number", "style #", "style", "style code", "style no",
        "article number", "article #", "article", "art no", "art #",
        "item number", "item #", "item no", "item code",
        "product code", "prod code", "code", "reference", "ref",
        "model", "model number", "model #", "part number", "part #",
    ),
    "vendor_sku": (
        "vendor sku", "vendor_sku", "supplier sku", "factory sku",
        "manufacturer sku", "mfr sku", "mfg sku", "supplier code",
        "vendor code", "vendor item", "vendor ref", "supplier ref",
        "factory code", "factory ref", "external sku",
    ),
    "product_name": (
        "product name", "product_name", "product", "name", "description",
        "title", "item", "item name", "item description", "product description",
        "style name", "style description", "article name", "article description",
        "product title", "item title", "goods", "goods description",
        "merchandise", "merch", "desc", "product desc",
    ),
    "variant_title": (
        "variant", "variant title", "variant_title", "option", "variation",
        "variant name", "variant description", "option value",
    ),
    "size": (
        "size", "sz", "sizes", "sizing", "size code", "size value",
        "dimension", "dimensions", "product size", "item size",
        "s/m/l", "xs-xl", "size range",
    ),
    "color": (
        "color", "colour", "col", "colors", "colours", "color code",
        "colour code", "color name", "colour name", "colorway", "colourway",
        "shade", "hue", "tint", "color/colour",
    ),
    "material": (
        "material", "fabric", "composition", "materials", "fabrics",
        "content", "fabric content", "material content", "fabric composition",
        "textile", "cloth", "fiber", "fibre",
    ),
    "qty": (
        "qty", "quantity", "units", "order qty", "order quantity",
        "amount", "count", "pcs", "pieces", "total qty", "total quantity",
        "ordered", "ordered qty", "order units", "unit count",
        "no of units", "number of units", "# of units", "num units",
        "pack qty", "case qty", "carton qty", "stock", "inventory",
        "qty ordered", "quantity ordered", "order amount",
    ),
    "unit_cost": (
        "unit cost", "unit_cost", "cost", "price", "unit price",
        "wholesale", "wholesale price", "cost price", "fob", "fob price",
        "purchase price", "buy price", "buying price", "landed cost",
        "cost per unit", "price per unit", "ex-factory", "exw", "exw price",
        "factory price", "vendor price", "supplier price", "net price",
        "cost each", "each cost", "unit $", "$ per unit", "cogs",
        "first cost", "1st cost",
    ),
    "unit_retail": (
        "unit retail", "unit_retail", "retail", "rrp", "msrp",
        "retail price", "srp", "selling price", "sell price",
        "recommended retail", "suggested retail", "list price",
        "sales price", "retail $", "price retail", "consumer price",
        "ticket price", "tag price", "sticker price", "full price",
        "compare at", "compare at price", "original price",
    ),
    "barcode": (
        "barcode", "upc", "ean", "gtin", "upc code", "ean code",
        "upc-a", "ean-13", "ean13", "upc a", "bar code", "scan code",
        "gtin-14", "gtin14", "isbn", "asin",
    ),
    "weight": (
        "weight", "wt", "wgt", "gross weight", "net weight", "item weight",
        "product weight", "unit weight", "weight (kg)", "weight (lb)",
        "weight kg", "weight lb", "kg", "lbs", "grams", "g",
    ),
    "hs_code": (
        "hs code", "hs_code", "tariff code", "hts", "hts code",
        "harmonized code", "customs code", "tariff", "hs number",
        "commodity code", "schedule b", "hts number",
    ),
    "country_of_origin": (
        "country of origin", "origin", "coo", "made in", "country",
        "manufacturing country", "source country", "produced in",
        "manufactured in", "origin country", "mfg country",
    ),
}

# Minimum fuzzy score for a header to map onto a field
FUZZY_MATCH_THRESHOLD = 0.8

# Vendor preamble longer than this is not searched for a header row
HEADER_SCAN_ROWS = 10

# Share of a cost estimated from retail when no cost is given
RETAIL_COST_RATIO = 0.4

CURRENCY_SYMBOLS = "$€£¥"

DELIMITER_CANDIDATES: tuple[str, ...] = (",", "\t", ";", "|")

TEXT_EXTENSIONS = {"csv", "txt"}
WORKBOOK_EXTENSIONS = {"xlsx", "xls"}

# User-facing messages returned in FileUploadResult.error
PDF_NOT_SUPPORTED_MESSAGE = (
    "PDF parsing is not yet supported. Please convert to CSV or Excel format."
)
UNSUPPORTED_FILE_MESSAGE = (
    "Unsupported file type. Please upload CSV or Excel (.xlsx, .xls) files."
)
NO_DATA_MESSAGE = "No data found in file. Please check the file format."
NO_VALID_ROWS_MESSAGE = (
    "No valid line items found. Please check that your file has product names and quantities."
)
