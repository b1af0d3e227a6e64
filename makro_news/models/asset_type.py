from model_utils import Choices

# Declaration order doubles as the classifier's tie-break priority.
AssetType = Choices(
    ("EQUITY", "Stocks"),
    ("ETF", "ETF"),
    ("FUND", "Funds"),
    ("ADR", "ADR"),
    ("CRYPTO", "Crypto"),
    ("BOND", "Bonds"),
    ("COMMODITY", "Commodities"),
    ("FOREX", "Forex"),
    ("INDEX", "Indices"),
    ("DERIVATIVE", "Derivatives"),
    ("OTHER", "Other"),
    ("MACRO", "Macro"),
    ("POLITICS", "Politics"),
    ("GEOPOLITICS", "Geopolitics"),
)

ASSET_TYPE_VALUES: list[str] = [value for value, _ in AssetType]
