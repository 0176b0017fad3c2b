# /tests/fixtures.py

from pathgraph.models import AssessmentNode, CourseNode, LearningPathDraft, ModuleNode


def course(node_id, *prerequisites):
    return CourseNode(id=node_id, title=f"Course {node_id}", course_id=f"course-{node_id}", prerequisites=list(prerequisites))

def module(node_id, *prerequisites):
    return ModuleNode(id=node_id, title=f"Module {node_id}", module_id=f"module-{node_id}", prerequisites=list(prerequisites))

def assessment(node_id, *prerequisites):
    return AssessmentNode(id=node_id, title=f"Assessment {node_id}", assessment_id=f"assessment-{node_id}", prerequisites=list(prerequisites))


def linear_chain():
    """A <- B <- C"""
    return LearningPathDraft(title="Linear chain", nodes=[course("A"), module("B", "A"), assessment("C", "B")])

def diamond():
    """A <- B, A <- C, (B, C) <- D"""
    return LearningPathDraft(title="Diamond", nodes=[course("A"), module("B", "A"), module("C", "A"), assessment("D", "B", "C")])

def deep_chain(length):
    """n0 <- n1 <- ... <- n{length-1}, far deeper than the recursion limit"""
    nodes = [course("n0")] + [course(f"n{i}", f"n{i - 1}") for i in range(1, length)]
    return LearningPathDraft(title="Deep chain", nodes=nodes)

def lattice(layers):
    """Two nodes per layer, each depending on both nodes of the layer below"""
    nodes = [course("a0"), course("b0")]
    for i in range(1, layers):
        below = (f"a{i - 1}", f"b{i - 1}")
        nodes += [course(f"a{i}", *below), course(f"b{i}", *below)]
    return LearningPathDraft(title="Lattice", nodes=nodes)
