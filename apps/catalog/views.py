from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsStoreAdmin, IsStoreAdminOrReadOnly
from .models import Category, Product, ProductPlan
from .serializers import (
    CategorySerializer,
    ProductSerializer,
    ProductListSerializer,
    ProductWriteSerializer,
    ProductFilterSerializer,
    ProductPlanSerializer,
    DuplicateCheckSerializer,
    DuplicateCandidateSerializer,
)
from .services import (
    create_category,
    update_category,
    delete_category,
    list_categories,
    create_product,
    update_product,
    soft_delete_product,
    get_product_by_slug,
    search_products,
    get_all_vendors,
    find_potential_duplicates,
    create_plan,
    update_plan,
    delete_plan,
    list_plans,
    CategoryNotFoundError,
    DuplicateCategoryError,
    ProductNotFoundError,
    DuplicateProductError,
    PlanNotFoundError,
)


class CatalogPagination(PageNumberPagination):
    """Custom pagination for catalog listings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CategoryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Category CRUD operations.

    Anyone can browse categories; only store admins can change them.
    """

    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    permission_classes = [IsStoreAdminOrReadOnly]

    def get_queryset(self):
        return list_categories()

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            category = create_category(name=serializer.validated_data['name'])
        except DuplicateCategoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            category = update_category(
                category_id=kwargs.get('pk'),
                name=serializer.validated_data['name']
            )
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateCategoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CategorySerializer(category).data)

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_category(category_id=kwargs.get('pk'))
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


class ProductViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Product CRUD operations.

    list: Browse active products (with filters)
    create: Create a product (admin)
    retrieve: Get a product with its plans
    update / partial_update: Update a product (admin)
    destroy: Deactivate a product (admin)
    """

    queryset = Product.objects.filter(is_active=True).prefetch_related('plans', 'categories')
    serializer_class = ProductSerializer
    permission_classes = [IsStoreAdminOrReadOnly]
    pagination_class = CatalogPagination

    def get_queryset(self):
        """Filter products using input serializer validation."""
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = ProductFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return search_products(
            search=params.get('search'),
            category=params.get('category'),
            vendor=params.get('vendor'),
            min_price=params.get('min_price'),
            max_price=params.get('max_price'),
            in_stock=params.get('in_stock'),
        )

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return ProductListSerializer
        elif self.action in ['create', 'update', 'partial_update']:
            return ProductWriteSerializer
        return ProductSerializer

    def create(self, request, *args, **kwargs):
        """Create a new product."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            product = create_product(**serializer.validated_data)
        except (DuplicateProductError, CategoryNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update a product; PATCH only touches the given fields."""
        partial = kwargs.pop('partial', False)
        serializer = ProductWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        if partial and 'category_ids' not in request.data:
            data.pop('category_ids', None)

        try:
            product = update_product(product_id=kwargs.get('pk'), data=data)
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProductSerializer(product).data)

    def destroy(self, request, *args, **kwargs):
        """Soft delete a product."""
        try:
            soft_delete_product(product_id=kwargs.get('pk'))
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'], url_path=r'by-slug/(?P<slug>[-\w]+)')
    def by_slug(self, request, slug=None):
        """Get a product by its URL slug."""
        try:
            product = get_product_by_slug(slug=slug)
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ProductSerializer(product).data)

    @action(detail=False, methods=['get'])
    def vendors(self, request):
        """Get list of all vendors."""
        return Response(get_all_vendors())

    @extend_schema(
        parameters=[DuplicateCheckSerializer],
        responses={200: DuplicateCandidateSerializer(many=True)},
    )
    @action(
        detail=False,
        methods=['get'],
        permission_classes=[IsAuthenticated, IsStoreAdmin],
    )
    def duplicates(self, request):
        """Find existing products similar to the given name and vendor."""
        serializer = DuplicateCheckSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        candidates = find_potential_duplicates(**serializer.validated_data)
        data = [
            {'product': product, 'similarity': score, 'match_type': match_type}
            for product, score, match_type in candidates
        ]
        return Response(DuplicateCandidateSerializer(data, many=True).data)


class ProductPlanViewSet(viewsets.ModelViewSet):
    """
    ViewSet for ProductPlan CRUD operations.

    Plans are filtered by product with ``?product=<id>``.
    """

    queryset = ProductPlan.objects.select_related('product')
    serializer_class = ProductPlanSerializer
    permission_classes = [IsStoreAdminOrReadOnly]

    def get_queryset(self):
        return list_plans(product_id=self.request.query_params.get('product'))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        try:
            plan = create_plan(
                product_id=data['product'].id,
                name=data['name'],
                price=data['price'],
                guarantee=data.get('guarantee', 0),
                maintenance=data.get('maintenance', 0),
            )
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProductPlanSerializer(plan).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        try:
            plan = update_plan(
                plan_id=kwargs.get('pk'),
                name=data.get('name'),
                price=data.get('price'),
                guarantee=data.get('guarantee'),
                maintenance=data.get('maintenance'),
            )
        except PlanNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ProductPlanSerializer(plan).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_plan(plan_id=kwargs.get('pk'))
        except PlanNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)
