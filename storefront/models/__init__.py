from storefront.models.product import Product
from storefront.models.storage_slot import StorageSlot
