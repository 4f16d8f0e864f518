"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class ProductImageSchema(BaseModel):
    url: str = Field(..., max_length=500)
    alt_text: str | None = Field(None, max_length=255)


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Pixel 9 Pro",
                    "description": "Flagship Android phone with a 6.3-inch OLED display.",
                    "short_description": "Google flagship, 256 GB",
                    "price": 999.0,
                    "discount_price": 899.0,
                    "category": "smartphones",
                    "subcategory": "android",
                    "brand": "Google",
                    "model": "GP9P-256",
                    "images": [{"url": "https://cdn.example.com/p9p.jpg", "alt_text": "Pixel 9 Pro"}],
                    "stock": 25,
                    "featured": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    description: str
    short_description: str | None = Field(None, max_length=200)
    price: float = Field(..., gt=0)
    discount_price: float | None = Field(None, ge=0)
    category: str
    subcategory: str = Field(..., max_length=100)
    brand: str = Field(..., max_length=100)
    model: str | None = Field(None, max_length=100)
    sku: str | None = Field(None, max_length=50)
    images: list[ProductImageSchema] = Field(default_factory=list)
    stock: int = Field(0, ge=0)
    low_stock_threshold: int = Field(10, ge=0)
    availability: bool = True
    featured: bool = False
    trending: bool = False
    best_seller: bool = False


class UpdateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "price": 949.0,
                    "discount_price": 849.0,
                    "featured": False,
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=100)
    description: str | None = None
    short_description: str | None = Field(None, max_length=200)
    price: float | None = Field(None, gt=0)
    discount_price: float | None = Field(None, ge=0)
    remove_discount: bool = False
    category: str | None = None
    subcategory: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=100)
    low_stock_threshold: int | None = Field(None, ge=0)
    availability: bool | None = None
    status: str | None = None
    featured: bool | None = None
    trending: bool | None = None
    best_seller: bool | None = None


class SubmitReviewRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"rating": 5, "comment": "Battery lasts two days."}]}}

    rating: int
    comment: str = Field(..., max_length=500)


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Smartphones",
                    "description": "Latest smartphones with cutting-edge technology",
                    "featured": True,
                    "sort_order": 1,
                }
            ]
        }
    }

    name: str = Field(..., max_length=50)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    featured: bool = False
    sort_order: int = 0


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, max_length=50)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    featured: bool | None = None
    is_active: bool | None = None
    sort_order: int | None = None


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-abc123"}]}}

    product_id: str


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"


class ReviewResponse(BaseModel):
    review_id: str
    user_id: str
    name: str
    rating: int
    comment: str
    helpful: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str
    short_description: str | None = None
    price: float
    discount_price: float | None = None
    final_price: float
    discount_percentage: int
    category: str
    subcategory: str
    brand: str
    model: str | None = None
    sku: str
    images: list[ProductImageSchema] = Field(default_factory=list)
    stock: int
    stock_status: str
    low_stock_threshold: int
    availability: bool
    status: str
    featured: bool
    trending: bool
    best_seller: bool
    rating: float
    num_of_reviews: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total_products: int
    current_page: int
    total_pages: int


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
    average_rating: float
    total_reviews: int
    current_page: int
    total_pages: int


class ReviewSubmittedResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok", "rating": 4.5}]}}

    status: str = "ok"
    rating: float


class ProductShowcaseResponse(BaseModel):
    count: int
    products: list[ProductResponse]


class CategoryProductListResponse(ProductListResponse):
    category: str


class BrandListResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"count": 2, "brands": ["Apple", "Samsung"]}]}}

    count: int
    brands: list[str]


class PriceRangeResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"min_price": 29.0, "max_price": 2499.0}]}}

    min_price: float
    max_price: float


class CategoryIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"category_id": "cat-abc123"}]}}

    category_id: str


class CategoryResponse(BaseModel):
    category_id: str
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None
    featured: bool
    is_active: bool
    sort_order: int
    product_count: int | None = None


class CategoryListResponse(BaseModel):
    count: int
    categories: list[CategoryResponse]
