# products_server/container.py
from fastapi import Depends, Request

from products_server.application.product_service import ProductService
from products_server.domain.ports import ProductRepoPort


def get_product_repo(request: Request) -> ProductRepoPort:
    # Dipasang sekali oleh lifespan / create_app, bukan singleton modul.
    return request.app.state.repo


def get_product_service(repo: ProductRepoPort = Depends(get_product_repo)) -> ProductService:
    return ProductService(repo)
