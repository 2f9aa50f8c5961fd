from explorewithme.main_service.schemas.base import ApiModel, CategoryName


class NewCategoryDto(ApiModel):
    name: CategoryName


class CategoryDto(ApiModel):
    id: int
    name: str
