"""Tagged union over the two live entity kinds."""

from typing import Annotated, Union

from pydantic import Field, TypeAdapter

from folio.models.domain.document import Document
from folio.models.domain.folder import Folder

StoreItem = Annotated[Union[Document, Folder], Field(discriminator="kind")]

store_item_adapter: TypeAdapter[StoreItem] = TypeAdapter(StoreItem)
