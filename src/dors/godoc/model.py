"""Documentation model extracted from one Go package."""

from pydantic import BaseModel, Field

# --- Symbols --- #


class Example(BaseModel):
	"""A testable example (``func ExampleXxx()``) found in a _test.go file."""

	name: str = ""
	suffix: str = ""
	doc: str = ""
	code: str = ""
	output: str = ""
	pos: int = 0


class Value(BaseModel):
	"""A const or var declaration group."""

	names: list[str] = Field(default_factory=list)
	doc: str = ""
	decl: str = Field("", description="Source text of the whole declaration")
	pos: int = 0


class Func(BaseModel):
	"""A function or method."""

	name: str
	doc: str = ""
	recv: str = Field("", description="Receiver type expression, e.g. '*Buffer'; empty for functions")
	recv_name: str = ""
	type_params: str = ""
	params: str = "()"
	results: str = ""
	source: str = ""
	pos: int = 0
	examples: list[Example] = Field(default_factory=list)

	@property
	def is_method(self) -> bool:
		"""Whether this function has a receiver."""
		return bool(self.recv)


class TypeDoc(BaseModel):
	"""A type declaration with everything associated to it."""

	name: str
	doc: str = ""
	decl: str = "type"
	spec: str = Field("", description="Type spec source text without the 'type' keyword")
	source: str = ""
	pos: int = 0
	consts: list[Value] = Field(default_factory=list)
	vars: list[Value] = Field(default_factory=list)
	funcs: list[Func] = Field(default_factory=list, description="Factory functions returning this type")
	methods: list[Func] = Field(default_factory=list)
	examples: list[Example] = Field(default_factory=list)


# --- Package --- #


class Package(BaseModel):
	"""Documentation for one package directory."""

	name: str = ""
	import_path: str = ""
	doc: str = ""
	filenames: list[str] = Field(default_factory=list)
	imports: list[str] = Field(default_factory=list)
	consts: list[Value] = Field(default_factory=list)
	vars: list[Value] = Field(default_factory=list)
	funcs: list[Func] = Field(default_factory=list)
	types: list[TypeDoc] = Field(default_factory=list)
	examples: list[Example] = Field(default_factory=list)
	is_cmd: bool = False

	@classmethod
	def empty(cls) -> "Package":
		"""Return the placeholder model used for directories without a package."""
		return cls()
