"""Expression and statement node families.

Node classes are generated by ``make_syntax_tree_node`` and attached to
their base class, so they are spelled ``Expr.Binary``, ``Stmt.While``
and so on. Every node supports positional pattern matching::

    match expr:
        case Expr.Binary(left, operator, right): ...

and the classic ``accept(visitor)`` double dispatch, which calls
``visitor.visit_binary_expr(expr)``.

Nodes are immutable (list arguments are stored as tuples) and hash by
identity: two structurally equal nodes are still distinct keys in the
resolver's distance map.
"""


def make_syntax_tree_node(base_class, name, *attrs):
    def __init__(self, *values):
        if len(values) != len(attrs):
            message = f"{name}.__init__() takes {len(attrs)} positional arguments but {len(values)} were given"
            raise TypeError(message)

        for attr, value in zip(attrs, values):
            if isinstance(value, list):
                value = tuple(value)
            object.__setattr__(self, attr, value)

    def __setattr__(self, attr, value):
        raise AttributeError(f"{name} nodes are immutable, cannot set '{attr}'")

    def __repr__(self):
        fields = ", ".join(f"{attr}={getattr(self, attr)!r}" for attr in attrs)
        return f"{base_class.__name__}.{name}({fields})"

    visit_fn_name = f"visit_{name.lower()}_{base_class.__name__.lower()}"

    def accept(self, visitor):
        return getattr(visitor, visit_fn_name)(self)

    subclass = type(
        name, (base_class,),
        {"__init__": __init__,
         "__setattr__": __setattr__,
         "__repr__": __repr__,
         "__slots__": attrs,
         "__match_args__": attrs,
         "__qualname__": f"{base_class.__name__}.{name}",
         "accept": accept})

    setattr(base_class, name, subclass)

    def visit(self, node):
        raise NotImplementedError()

    setattr(base_class.Visitor, visit_fn_name, visit)


class Expr:
    __slots__ = ()

    def accept(self, visitor):
        raise NotImplementedError()

    class Visitor:
        pass


class Stmt:
    __slots__ = ()

    def accept(self, visitor):
        raise NotImplementedError()

    class Visitor:
        pass


# Expr subclasses
make_syntax_tree_node(Expr, "Assign", "name", "value")
make_syntax_tree_node(Expr, "Binary", "left", "operator", "right")
make_syntax_tree_node(Expr, "Call", "callee", "paren", "arguments")
make_syntax_tree_node(Expr, "Conditional", "condition", "then_branch", "else_branch")
make_syntax_tree_node(Expr, "Get", "object", "name")
make_syntax_tree_node(Expr, "Grouping", "expression")
make_syntax_tree_node(Expr, "Literal", "value")
make_syntax_tree_node(Expr, "Logical", "left", "operator", "right")
make_syntax_tree_node(Expr, "Set", "object", "name", "value")
make_syntax_tree_node(Expr, "Super", "keyword", "method")
make_syntax_tree_node(Expr, "This", "keyword")
make_syntax_tree_node(Expr, "Unary", "operator", "right")
make_syntax_tree_node(Expr, "Variable", "name")

# Stmt subclasses
make_syntax_tree_node(Stmt, "Block", "statements")
make_syntax_tree_node(Stmt, "Class", "name", "superclass", "methods")
make_syntax_tree_node(Stmt, "Expression", "expression")
make_syntax_tree_node(Stmt, "Function", "name", "params", "body")
make_syntax_tree_node(Stmt, "If", "condition", "then_branch", "else_branch")
make_syntax_tree_node(Stmt, "Print", "expression")
make_syntax_tree_node(Stmt, "Return", "keyword", "value")
make_syntax_tree_node(Stmt, "Var", "name", "initializer")
make_syntax_tree_node(Stmt, "While", "condition", "body")
