"""
XOR Problem Implementation for NEAT

This module implements the classic XOR (exclusive OR) problem as a benchmark
for the NEAT algorithm. The XOR problem is a fundamental test case in neural
network research, demonstrating the necessity of hidden layers for solving
non-linearly separable problems.

The XOR Problem:
    XOR is a two-input, one-output boolean function where the output is True
    only when the inputs differ:
        Input (0, 0) → Output 0
        Input (0, 1) → Output 1
        Input (1, 0) → Output 1
        Input (1, 1) → Output 0

    This problem cannot be solved without at least one hidden neuron, making
    it an ideal minimal test case for topology-evolving algorithms like NEAT.

Fitness Function:
    Fitness = 4.0 - Σ(output - target)²

    Maximum fitness of 4.0 is achieved when all four XOR cases produce exact outputs.
    Since neurons only fire for positive signals, the (0, 0) case is always exact.

Classes:
    Trial_XOR: NEAT trial for solving XOR

Usage:
    python examples/trial_XOR.py [config_xor.ini]
"""

import sys
from pathlib import Path

from neatcore.genotype      import Genome
from neatcore.pool          import Population
from neatcore.run           import Config, Trial
from neatcore.visualization import explain_genome, plot_fitness

class Trial_XOR(Trial):
    """
    NEAT trial for solving the XOR (exclusive OR) problem.

    Each genome has two input neurons (payloads "a" and "b") and one
    output neuron (payload "xor"). An input frame is a dictionary mapping
    the input payloads to 0.0 or 1.0.

    Implemented Methods:
        _create_population():       Seed a population of fully connected minimal networks
        _evaluate_fitness(genome):  Test the network on all 4 XOR cases
        _final_report():            Explain the fittest genome and plot the fitness history
    """

    XOR_CASES = [({"a": 0.0, "b": 0.0}, 0.0),
                 ({"a": 0.0, "b": 1.0}, 1.0),
                 ({"a": 1.0, "b": 0.0}, 1.0),
                 ({"a": 1.0, "b": 1.0}, 0.0)]

    def _create_population(self) -> Population:
        return Population.from_topology(["a", "b"], ["xor"], self._config)

    def _evaluate_fitness(self, genome: Genome) -> float:
        """
        Evaluate genome fitness by testing on XOR inputs.

        Parameters:
            genome: The genome to evaluate

        Returns:
            Fitness score (maximum 4.0 for perfect XOR solution)
        """
        fitness = 4.0  # max possible fitness
        for inputs, expected_output in self.XOR_CASES:
            output   = genome.evaluate(inputs.get)["xor"]   # evaluate the network
            error    = output - expected_output             # calculate error
            fitness -= error ** 2                           # errors cause the fitness to decrease
        return fitness

    def _final_report(self):
        """
        Display results at the end of the trial.
        """
        super()._final_report()

        fittest = self._population.get_fittest_genome(self._fitness)
        print(explain_genome(fittest, enabled_only=True))

        s  = "input         output   target\n"
        s += "-----------------------------\n"
        for inputs, target in self.XOR_CASES:
            output = fittest.evaluate(inputs.get)["xor"]
            s += f"{[inputs['a'], inputs['b']]} -> {output:.4f}    {target}\n"
        print(s)

        plot_fitness(self.fitness_history, save_path="xor_fitness.png", title="XOR")
        print("Fitness history saved as 'xor_fitness.png'")

if __name__ == "__main__":
    config_file = sys.argv[1] if len(sys.argv) > 1 else Path(__file__).parent / "config_xor.ini"
    trial = Trial_XOR(Config(str(config_file)))
    trial.run()
