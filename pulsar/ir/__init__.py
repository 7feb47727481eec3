"""Intermediate representation: variables, ports, operations, control and labels."""