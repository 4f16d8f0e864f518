"""FastAPI endpoints for the Catalogue.

Public browsing lives under ``/api/products`` and ``/api/categories``;
catalogue maintenance under ``/api/admin/...`` is restricted to admins.
"""

import json
import math

from fastapi import APIRouter, Depends, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    BrandListResponse,
    CategoryIdResponse,
    CategoryListResponse,
    CategoryProductListResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    PriceRangeResponse,
    ProductIdResponse,
    ProductImageSchema,
    ProductListResponse,
    ProductResponse,
    ProductShowcaseResponse,
    ReviewListResponse,
    ReviewResponse,
    ReviewSubmittedResponse,
    StatusResponse,
    SubmitReviewRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from storefront.catalogue.categories import CreateCategory, DeleteCategory, UpdateCategory
from storefront.catalogue.category import Category
from storefront.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.catalogue.reviews import SubmitReview
from storefront.shared.principal import Principal, get_principal, require_admin
from storefront.shared.settings import MAX_PAGE_SIZE, store_setting

product_router = APIRouter(prefix="/api/products", tags=["products"])
admin_product_router = APIRouter(
    prefix="/api/admin/products",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)
category_router = APIRouter(prefix="/api/categories", tags=["categories"])
admin_category_router = APIRouter(
    prefix="/api/admin/categories",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


def product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        short_description=product.short_description,
        price=product.price,
        discount_price=product.discount_price,
        final_price=product.final_price,
        discount_percentage=product.discount_percentage,
        category=product.category,
        subcategory=product.subcategory,
        brand=product.brand,
        model=product.model_number,
        sku=product.sku,
        images=[ProductImageSchema(url=img.url, alt_text=img.alt_text) for img in product.images],
        stock=product.stock,
        stock_status=product.stock_status,
        low_stock_threshold=product.low_stock_threshold,
        availability=product.availability,
        status=product.status,
        featured=product.featured,
        trending=product.trending,
        best_seller=product.best_seller,
        rating=product.rating,
        num_of_reviews=product.num_of_reviews,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


# ---------------------------------------------------------------------------
# Public browsing
# ---------------------------------------------------------------------------
def _product_page(category, page, limit) -> dict:
    limit = limit or store_setting("PRODUCTS_PER_PAGE")
    result = current_domain.repository_for(Product).list_active(category=category, page=page, limit=limit)
    return {
        "products": [product_response(p) for p in result.items],
        "total_products": result.total,
        "current_page": page,
        "total_pages": math.ceil(result.total / limit),
    }


def _showcase(flag: str) -> ProductShowcaseResponse:
    products = current_domain.repository_for(Product).showcase(flag, limit=store_setting("SHOWCASE_LIMIT"))
    return ProductShowcaseResponse(count=len(products), products=[product_response(p) for p in products])


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
) -> ProductListResponse:
    """Active, available products, newest first."""
    return ProductListResponse(**_product_page(category, page, limit))


@product_router.get("/featured", response_model=ProductShowcaseResponse)
async def featured_products() -> ProductShowcaseResponse:
    return _showcase("featured")


@product_router.get("/trending", response_model=ProductShowcaseResponse)
async def trending_products() -> ProductShowcaseResponse:
    return _showcase("trending")


@product_router.get("/bestsellers", response_model=ProductShowcaseResponse)
async def best_sellers() -> ProductShowcaseResponse:
    return _showcase("best_seller")


@product_router.get("/brands", response_model=BrandListResponse)
async def list_brands() -> BrandListResponse:
    """Distinct brands of the active catalogue, alphabetically."""
    brands = current_domain.repository_for(Product).brands()
    return BrandListResponse(count=len(brands), brands=brands)


@product_router.get("/price-range", response_model=PriceRangeResponse)
async def price_range() -> PriceRangeResponse:
    min_price, max_price = current_domain.repository_for(Product).price_range()
    return PriceRangeResponse(min_price=min_price, max_price=max_price)


@product_router.get("/category/{category}", response_model=CategoryProductListResponse)
async def products_in_category(
    category: str,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
) -> CategoryProductListResponse:
    return CategoryProductListResponse(category=category, **_product_page(category, page, limit))


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return product_response(product)


@product_router.get("/{product_id}/related", response_model=ProductShowcaseResponse)
async def related_products(product_id: str) -> ProductShowcaseResponse:
    """Other active products in the same category or from the same brand."""
    repo = current_domain.repository_for(Product)
    related = repo.related(repo.get(product_id), limit=store_setting("SHOWCASE_LIMIT"))
    return ProductShowcaseResponse(count=len(related), products=[product_response(p) for p in related])


@product_router.get("/{product_id}/reviews", response_model=ReviewListResponse)
async def list_reviews(
    product_id: str,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
) -> ReviewListResponse:
    """Reviews for a product, newest first, with the product's average rating."""
    limit = limit or store_setting("REVIEWS_PER_PAGE")

    product = current_domain.repository_for(Product).get(product_id)
    reviews = sorted(product.reviews, key=lambda r: r.created_at, reverse=True)
    start = (page - 1) * limit

    return ReviewListResponse(
        reviews=[
            ReviewResponse(
                review_id=str(r.id),
                user_id=str(r.user_id),
                name=r.name,
                rating=r.rating,
                comment=r.comment,
                helpful=r.helpful,
                created_at=r.created_at,
                updated_at=r.updated_at,
            )
            for r in reviews[start : start + limit]
        ],
        average_rating=product.rating,
        total_reviews=len(reviews),
        current_page=page,
        total_pages=math.ceil(len(reviews) / limit),
    )


@product_router.post("/{product_id}/reviews", response_model=ReviewSubmittedResponse)
async def submit_review(
    product_id: str,
    body: SubmitReviewRequest,
    principal: Principal = Depends(get_principal),
) -> ReviewSubmittedResponse:
    """Create the caller's review, or update it if they already reviewed the product."""
    command = SubmitReview(
        product_id=product_id,
        user_id=principal.id,
        name=principal.name or "Anonymous",
        rating=body.rating,
        comment=body.comment,
    )
    rating = current_domain.process(command, asynchronous=False)
    return ReviewSubmittedResponse(rating=rating)


# ---------------------------------------------------------------------------
# Admin maintenance
# ---------------------------------------------------------------------------
@admin_product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        short_description=body.short_description,
        price=body.price,
        discount_price=body.discount_price,
        category=body.category,
        subcategory=body.subcategory,
        brand=body.brand,
        model_number=body.model,
        sku=body.sku,
        images=json.dumps([img.model_dump() for img in body.images]),
        stock=body.stock,
        low_stock_threshold=body.low_stock_threshold,
        availability=body.availability,
        featured=body.featured,
        trending=body.trending,
        best_seller=body.best_seller,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@admin_product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        short_description=body.short_description,
        price=body.price,
        discount_price=body.discount_price,
        remove_discount=body.remove_discount,
        category=body.category,
        subcategory=body.subcategory,
        brand=body.brand,
        model_number=body.model,
        low_stock_threshold=body.low_stock_threshold,
        availability=body.availability,
        status=body.status,
        featured=body.featured,
        trending=body.trending,
        best_seller=body.best_seller,
    )
    current_domain.process(command, asynchronous=False)
    return product_response(current_domain.repository_for(Product).get(product_id))


@admin_product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(status="deleted")


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
def category_response(category, product_count=None) -> CategoryResponse:
    return CategoryResponse(
        category_id=str(category.id),
        name=category.name,
        slug=category.slug,
        description=category.description,
        image_url=category.image_url,
        featured=category.featured,
        is_active=category.is_active,
        sort_order=category.sort_order,
        product_count=product_count,
    )


@category_router.get("", response_model=CategoryListResponse)
async def list_categories() -> CategoryListResponse:
    categories = current_domain.repository_for(Category).list_active()
    return CategoryListResponse(count=len(categories), categories=[category_response(c) for c in categories])


@category_router.get("/featured", response_model=CategoryListResponse)
async def featured_categories() -> CategoryListResponse:
    categories = current_domain.repository_for(Category).list_active(
        featured_only=True, limit=store_setting("SHOWCASE_LIMIT")
    )
    return CategoryListResponse(count=len(categories), categories=[category_response(c) for c in categories])


@category_router.get("/{slug}", response_model=CategoryResponse)
async def get_category(slug: str) -> CategoryResponse:
    category = current_domain.repository_for(Category).find_by_slug(slug)
    if category is None or not category.is_active:
        raise ObjectNotFoundError({"category": ["Category not found"]})
    return category_response(category, current_domain.repository_for(Product).count(category=category.slug))


@admin_category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryIdResponse:
    command = CreateCategory(
        name=body.name,
        description=body.description,
        image_url=body.image_url,
        featured=body.featured,
        sort_order=body.sort_order,
    )
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@admin_category_router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(category_id: str, body: UpdateCategoryRequest) -> CategoryResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
        image_url=body.image_url,
        featured=body.featured,
        is_active=body.is_active,
        sort_order=body.sort_order,
    )
    current_domain.process(command, asynchronous=False)
    return category_response(current_domain.repository_for(Category).get(category_id))


@admin_category_router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse(status="deleted")
